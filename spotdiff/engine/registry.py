"""Stage registry — every pipeline stage is a standalone function registered via decorator.

Usage:
    @stage(id="D2.02", phase=Phase.REGIONS, dependencies=["D2.01"])
    def region_filter(ctx: DetectionContext) -> None:
        ctx.filtered_regions = filter_regions(ctx.regions, ctx.params)

Execution order comes from the declared dependencies, not from import order.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from spotdiff.engine.context import DetectionContext

logger = logging.getLogger(__name__)


class Phase(enum.IntEnum):
    TUNING = 0
    DIFF_MAP = 1
    REGIONS = 2
    RESOLUTION = 3


@dataclass
class StageSpec:
    id: str
    phase: Phase
    fn: Callable[["DetectionContext"], None]
    dependencies: list[str] = field(default_factory=list)
    description: str = ""


class StageRegistry:
    """Registry of pipeline stages, keyed by stage id."""

    def __init__(self) -> None:
        self._stages: dict[str, StageSpec] = {}

    def register(self, spec: StageSpec) -> None:
        if spec.id in self._stages:
            raise ValueError(f"Duplicate stage ID: {spec.id}")
        self._stages[spec.id] = spec
        logger.debug("Registered stage %s (%s)", spec.id, spec.phase.name)

    def get(self, stage_id: str) -> StageSpec:
        return self._stages[stage_id]

    def get_phase(self, phase: Phase) -> list[StageSpec]:
        return [s for s in self.resolve_order() if s.phase == phase]

    def all(self) -> list[StageSpec]:
        return sorted(self._stages.values(), key=lambda s: (s.phase, s.id))

    def resolve_order(self) -> list[StageSpec]:
        """Topological sort (Kahn) over declared dependencies, ties broken by id."""
        pool = self._stages
        in_degree: dict[str, int] = {sid: 0 for sid in pool}
        for sid, spec in pool.items():
            for dep in spec.dependencies:
                if dep not in pool:
                    raise ValueError(f"Stage {sid} depends on unknown stage {dep}")
                in_degree[sid] += 1

        queue = sorted(sid for sid, d in in_degree.items() if d == 0)
        ordered: list[StageSpec] = []

        while queue:
            sid = queue.pop(0)
            ordered.append(pool[sid])
            for other_id, other_spec in pool.items():
                if sid in other_spec.dependencies:
                    in_degree[other_id] -= 1
                    if in_degree[other_id] == 0:
                        queue.append(other_id)
                        queue.sort()

        if len(ordered) != len(pool):
            missing = set(pool.keys()) - {s.id for s in ordered}
            raise ValueError(f"Circular dependency detected among: {missing}")

        return ordered

    @property
    def count(self) -> int:
        return len(self._stages)


# Module-level registry, filled once when the stage modules are imported
_registry = StageRegistry()


def get_registry() -> StageRegistry:
    return _registry


def stage(
    *,
    id: str,
    phase: Phase,
    dependencies: list[str] | None = None,
    description: str = "",
):
    """Decorator to register a stage function."""

    def decorator(fn: Callable[["DetectionContext"], None]):
        _registry.register(
            StageSpec(
                id=id,
                phase=phase,
                fn=fn,
                dependencies=dependencies or [],
                description=description,
            )
        )
        return fn

    return decorator
