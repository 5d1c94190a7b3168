"""Common response schemas."""
from pydantic import BaseModel


class SuccessResponse(BaseModel):
    """Standard success response."""
    ok: bool = True
    message: str


class ErrorResponse(BaseModel):
    """Standard error response."""
    ok: bool = False
    error: str
