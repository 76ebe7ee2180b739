from typing import List, Optional

from pydantic import BaseModel, Field


class MatrixCell(BaseModel):
    probability: int
    consequence: int
    sum: int
    tier: str
    highlighted: bool


class MatrixAssessment(BaseModel):
    probability: Optional[int]
    consequence: Optional[int]
    probability_label: Optional[str] = None
    consequence_label: Optional[str] = None
    derived: bool = False
    cell_sum: Optional[int] = None
    cell_tier: Optional[str] = None
    headline_score: Optional[int] = None
    headline_tier: Optional[str] = None
    grid: List[List[MatrixCell]] = Field(default_factory=list)
