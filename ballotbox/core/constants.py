"""Application constants.

This module contains magic strings and numbers used throughout the application.
Centralizing these values makes them easier to maintain and modify.
"""

# Ballot
# Option names seeded on first startup, in id order (ids start at 1)
DEFAULT_VOTE_OPTIONS = (
    "PRIMER AÑO",
    "SEGUNDO AÑO",
    "TERCER AÑO",
    "CUARTO AÑO",
    "QUINTO AÑO",
)

# Column limits
OPTION_NAME_MAX_LENGTH = 200

# User-facing messages returned in {ok, message|error} bodies
MSG_VOTE_REGISTERED = "Voto registrado"
MSG_INVALID_OPTION = "optionId inválido"
MSG_DUPLICATE_VOTE = "Este dispositivo/IP ya votó"
MSG_STORAGE_FAILURE = "Error al registrar voto"

# Identity used when neither a forwarded header nor a peer address is known
UNKNOWN_IDENTITY = "unknown"

# SSE stream gives up after this many database errors in a row
SSE_MAX_CONSECUTIVE_ERRORS = 3
