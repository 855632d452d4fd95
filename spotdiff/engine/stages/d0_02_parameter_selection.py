"""D0.02 — Preset selection.

A lookup over two complexity breakpoints. Downstream stages only ever see
the resulting AnalysisParams, never the complexity score.
"""

from __future__ import annotations

from spotdiff.engine.config import DEFAULT_CONFIG, PipelineConfig
from spotdiff.engine.context import DetectionContext
from spotdiff.engine.params import PRESET_HIGH, PRESET_LOW, PRESET_MEDIUM, AnalysisParams, get_preset
from spotdiff.engine.registry import Phase, stage


def select_preset(complexity: float, config: PipelineConfig = DEFAULT_CONFIG) -> str:
    if complexity < config.low_complexity_breakpoint:
        return PRESET_LOW
    if complexity < config.high_complexity_breakpoint:
        return PRESET_MEDIUM
    return PRESET_HIGH


def select_params(complexity: float, config: PipelineConfig = DEFAULT_CONFIG) -> AnalysisParams:
    return get_preset(select_preset(complexity, config))


@stage(
    id="D0.02",
    phase=Phase.TUNING,
    dependencies=["D0.01"],
    description="Map complexity onto a parameter preset",
)
def parameter_selection_stage(ctx: DetectionContext) -> None:
    ctx.preset = select_preset(ctx.complexity, ctx.config)
    ctx.params = get_preset(ctx.preset)
