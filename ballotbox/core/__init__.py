"""Configuration, logging, errors and request identity."""
