"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from spotdiff.engine.context import Difference
from spotdiff.models.requests import AnalysisParamsModel


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    stages_registered: int = 0


class DifferenceModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    x: float
    y: float
    radius: float
    found_time: float | None = Field(default=None, alias="foundTime")

    @classmethod
    def from_difference(cls, diff: Difference) -> DifferenceModel:
        return cls(**diff.to_dict())


class DetectResponse(BaseModel):
    differences: list[DifferenceModel] = Field(default_factory=list)
    params: AnalysisParamsModel
    complexity: float | None = None
    preset: str | None = None
    stats: dict[str, int] = Field(default_factory=dict)
    timings_ms: dict[str, float] = Field(default_factory=dict)
    processing_time_ms: float = 0.0


class SuggestParamsResponse(BaseModel):
    complexity: float
    preset: str
    params: AnalysisParamsModel


class PresetsResponse(BaseModel):
    low_complexity_breakpoint: float
    high_complexity_breakpoint: float
    presets: dict[str, AnalysisParamsModel]


class ErrorDetail(BaseModel):
    kind: str
    message: str


class ErrorResponse(BaseModel):
    """Body of a 422 raised for an AnalysisError."""

    detail: ErrorDetail
