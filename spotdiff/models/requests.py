"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from spotdiff.engine.params import AnalysisParams


class AnalysisParamsModel(BaseModel):
    """Tuning parameters on the wire (camelCase, as the game UI sends them)."""

    model_config = ConfigDict(populate_by_name=True)

    blur_radius: float = Field(..., alias="blurRadius", ge=0, le=5)
    color_threshold: float = Field(..., alias="colorThreshold", ge=10, le=150)
    min_region_size: int = Field(..., alias="minRegionSize", ge=1)
    merge_distance: float = Field(..., alias="mergeDistance", ge=0)
    min_density: float = Field(..., alias="minDensity", ge=0, le=1)
    min_aspect_ratio: float = Field(..., alias="minAspectRatio", gt=0)
    max_aspect_ratio: float = Field(..., alias="maxAspectRatio", gt=0)
    max_region_size_percent: float = Field(..., alias="maxRegionSizePercent", gt=0, le=1)
    circle_radius_multiplier: float = Field(..., alias="circleRadiusMultiplier", ge=1)

    def to_params(self) -> AnalysisParams:
        return AnalysisParams(**self.model_dump(by_alias=False))

    @classmethod
    def from_params(cls, params: AnalysisParams) -> AnalysisParamsModel:
        return cls(**params.to_dict())


class DetectRequest(BaseModel):
    original: str = Field(..., description="Original image as a data URL or base64")
    modified: str = Field(..., description="Modified image as a data URL or base64")
    params: AnalysisParamsModel | None = Field(
        default=None,
        description="Explicit tuning; omitted = adaptive preset from the original image",
    )


class SuggestParamsRequest(BaseModel):
    image: str = Field(..., description="Image as a data URL or base64")
