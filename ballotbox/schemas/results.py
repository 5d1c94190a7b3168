"""Results schemas."""
from typing import List

from pydantic import BaseModel, Field


class OptionResult(BaseModel):
    id: int
    nombre: str
    cantidad: int = Field(..., ge=0)


class ResultsResponse(BaseModel):
    total: int = Field(..., ge=0)
    resultados: List[OptionResult]
