"""Vote schemas."""
from typing import Any

from pydantic import BaseModel


class VoteRequest(BaseModel):
    # Left untyped so a non-integer reaches the vote service and is rejected
    # there with the ballot's own error, not a 422
    optionId: Any = None
