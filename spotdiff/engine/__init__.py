"""SpotDiff difference-detection engine."""

from spotdiff.engine.config import PipelineConfig
from spotdiff.engine.context import Circle, DetectionContext, Difference, PixelBuffer, Region
from spotdiff.engine.detector import analyze, detect, score_complexity, suggest_params
from spotdiff.engine.errors import AnalysisError, ErrorKind
from spotdiff.engine.params import PRESETS, AnalysisParams
from spotdiff.engine.pipeline import Pipeline, create_pipeline
from spotdiff.engine.registry import Phase, get_registry, stage

__all__ = [
    "AnalysisError",
    "AnalysisParams",
    "Circle",
    "DetectionContext",
    "Difference",
    "ErrorKind",
    "Phase",
    "PipelineConfig",
    "Pipeline",
    "PixelBuffer",
    "PRESETS",
    "Region",
    "analyze",
    "create_pipeline",
    "detect",
    "get_registry",
    "score_complexity",
    "stage",
    "suggest_params",
]
