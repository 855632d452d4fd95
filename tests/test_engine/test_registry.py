"""Tests for the stage registry."""

import pytest

from spotdiff.engine.context import DetectionContext
from spotdiff.engine.pipeline import load_stages
from spotdiff.engine.registry import Phase, StageRegistry, StageSpec


def _noop(ctx: DetectionContext) -> None:
    pass


def test_register_and_get():
    reg = StageRegistry()
    spec = StageSpec(id="D0.01", phase=Phase.TUNING, fn=_noop)
    reg.register(spec)
    assert reg.get("D0.01") is spec
    assert reg.count == 1


def test_duplicate_id_rejected():
    reg = StageRegistry()
    reg.register(StageSpec(id="D0.01", phase=Phase.TUNING, fn=_noop))
    with pytest.raises(ValueError, match="Duplicate"):
        reg.register(StageSpec(id="D0.01", phase=Phase.TUNING, fn=_noop))


def test_get_phase():
    reg = StageRegistry()
    reg.register(StageSpec(id="D0.01", phase=Phase.TUNING, fn=_noop))
    reg.register(StageSpec(id="D1.01", phase=Phase.DIFF_MAP, fn=_noop))
    tuning = reg.get_phase(Phase.TUNING)
    assert [s.id for s in tuning] == ["D0.01"]


def test_resolve_order_with_deps():
    reg = StageRegistry()
    reg.register(StageSpec(id="D2.02", phase=Phase.REGIONS, fn=_noop, dependencies=["D2.01"]))
    reg.register(StageSpec(id="D2.01", phase=Phase.REGIONS, fn=_noop, dependencies=["D1.01"]))
    reg.register(StageSpec(id="D1.01", phase=Phase.DIFF_MAP, fn=_noop))
    assert [s.id for s in reg.resolve_order()] == ["D1.01", "D2.01", "D2.02"]


def test_cycle_detected():
    reg = StageRegistry()
    reg.register(StageSpec(id="A", phase=Phase.REGIONS, fn=_noop, dependencies=["B"]))
    reg.register(StageSpec(id="B", phase=Phase.REGIONS, fn=_noop, dependencies=["A"]))
    with pytest.raises(ValueError, match="Circular"):
        reg.resolve_order()


def test_unknown_dependency():
    reg = StageRegistry()
    reg.register(StageSpec(id="A", phase=Phase.REGIONS, fn=_noop, dependencies=["missing"]))
    with pytest.raises(ValueError, match="unknown"):
        reg.resolve_order()


def test_engine_stages_run_strictly_in_order():
    reg = load_stages()
    assert [s.id for s in reg.resolve_order()] == [
        "D0.01",
        "D0.02",
        "D1.01",
        "D2.01",
        "D2.02",
        "D2.03",
        "D3.01",
    ]
