"""Pipeline orchestrator — runs stages in dependency order with adaptive gating."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time
from collections.abc import Generator
from typing import Any

from spotdiff.engine.config import DEFAULT_CONFIG, PipelineConfig
from spotdiff.engine.context import DetectionContext
from spotdiff.engine.errors import AnalysisError
from spotdiff.engine.registry import Phase, StageRegistry, StageSpec, get_registry

logger = logging.getLogger(__name__)


class Pipeline:
    """Orchestrates the detection stages for one context at a time."""

    def __init__(
        self,
        registry: StageRegistry | None = None,
        config: PipelineConfig | None = None,
    ) -> None:
        self.registry = registry or get_registry()
        self.config = config or DEFAULT_CONFIG

    def run(self, ctx: DetectionContext) -> DetectionContext:
        """Run every applicable stage. Raises AnalysisError on the first failure."""
        start = time.perf_counter()
        ordered = self._plan(ctx)

        logger.info("Pipeline: %d stages queued", len(ordered))

        for spec in ordered:
            if ctx.halted:
                logger.debug("  halted before %s", spec.id)
                break
            self._run_stage(spec, ctx)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d/%d stages, %d differences in %.0fms",
            len(ctx.completed_stages),
            len(ordered),
            len(ctx.differences),
            total,
        )
        return ctx

    def run_streaming(self, ctx: DetectionContext) -> Generator[dict[str, Any], None, None]:
        """Run the pipeline, yielding a progress dict before and after each stage.

        The caller's ``ctx`` is mutated in place. A failing stage yields an
        ``error`` event and then raises, like ``run()``.
        """
        ordered = self._plan(ctx)
        total = len(ordered)

        for i, spec in enumerate(ordered):
            if ctx.halted:
                break
            event = {
                "stage_id": spec.id,
                "description": spec.description,
                "phase": spec.phase.name,
                "index": i,
                "total": total,
                "elapsed_ms": 0.0,
                "status": "running",
                "error": "",
            }
            yield event

            try:
                self._run_stage(spec, ctx)
            except AnalysisError as e:
                yield {**event, "status": "error", "error": str(e)}
                raise

            yield {**event, "status": "ok", "elapsed_ms": ctx.timings_ms[spec.id]}

    def run_phase(self, ctx: DetectionContext, phase: Phase) -> DetectionContext:
        """Run only the stages of one phase."""
        for spec in self.registry.get_phase(phase):
            if ctx.halted:
                break
            self._run_stage(spec, ctx)
        return ctx

    def _run_stage(self, spec: StageSpec, ctx: DetectionContext) -> None:
        t0 = time.perf_counter()
        try:
            spec.fn(ctx)
        except Exception as e:
            ctx.errors[spec.id] = str(e)
            # a failed run never hands back partial results
            ctx.differences = []
            logger.warning("  %s FAILED: %s", spec.id, e)
            raise
        elapsed = (time.perf_counter() - t0) * 1000
        ctx.completed_stages.add(spec.id)
        ctx.timings_ms[spec.id] = round(elapsed, 2)
        logger.debug("  %s completed in %.1fms", spec.id, elapsed)

    def _plan(self, ctx: DetectionContext) -> list[StageSpec]:
        skip = self._adaptive_gate(ctx)
        return [s for s in self.registry.resolve_order() if s.phase not in skip]

    def _adaptive_gate(self, ctx: DetectionContext) -> set[Phase]:
        """Explicit params skip the tuning phase; a missing modified image
        means only tuning can run."""
        if ctx.modified is None:
            return {Phase.DIFF_MAP, Phase.REGIONS, Phase.RESOLUTION}
        if ctx.params is not None:
            return {Phase.TUNING}
        return set()


def load_stages() -> StageRegistry:
    """Import every stage module so @stage decorators fire."""
    from spotdiff.engine import stages

    for _, module_name, _ in pkgutil.iter_modules(stages.__path__):
        importlib.import_module(f"{stages.__name__}.{module_name}")
    return get_registry()


def create_pipeline(config: PipelineConfig | None = None) -> Pipeline:
    """Factory function for creating a pipeline over the registered stages."""
    return Pipeline(registry=load_stages(), config=config)
