"""Entry points of the difference-detection engine.

Pure and synchronous: identical inputs always give identical output, no
state survives a call, and concurrent calls on separate buffers are safe.
"""

from __future__ import annotations

from spotdiff.engine.config import PipelineConfig
from spotdiff.engine.context import DetectionContext, Difference, PixelBuffer
from spotdiff.engine.params import AnalysisParams
from spotdiff.engine.pipeline import create_pipeline
from spotdiff.engine.registry import Phase


def analyze(
    original: PixelBuffer,
    modified: PixelBuffer,
    params: AnalysisParams | None = None,
    config: PipelineConfig | None = None,
) -> DetectionContext:
    """Run the full pipeline and return its context.

    Without ``params`` a preset is chosen from the complexity of ``original``.
    """
    pipeline = create_pipeline(config)
    ctx = DetectionContext(
        original=original,
        modified=modified,
        params=params,
        config=pipeline.config,
    )
    return pipeline.run(ctx)


def detect(
    original: PixelBuffer,
    modified: PixelBuffer,
    params: AnalysisParams,
    config: PipelineConfig | None = None,
) -> list[Difference]:
    """Differences between two equal-sized images, largest first, ids 0..n-1.

    Raises AnalysisError on invalid input; never returns partial results.
    """
    return analyze(original, modified, params, config).differences


def _tune(buffer: PixelBuffer, config: PipelineConfig | None) -> DetectionContext:
    pipeline = create_pipeline(config)
    ctx = DetectionContext(original=buffer, config=pipeline.config)
    return pipeline.run_phase(ctx, Phase.TUNING)


def score_complexity(
    buffer: PixelBuffer,
    config: PipelineConfig | None = None,
) -> tuple[float, str]:
    """Complexity score of one image and the preset it maps to."""
    ctx = _tune(buffer, config)
    return ctx.complexity, ctx.preset


def suggest_params(
    buffer: PixelBuffer,
    config: PipelineConfig | None = None,
) -> AnalysisParams:
    """Adaptive starting parameters for ``buffer``."""
    return _tune(buffer, config).params
