import pytest

from nntsp.metrics import NullReporter, Reporter, TimerRegistry


def test_null_reporter_accepts_anything():
    NullReporter().record("solve", 1.5)


def test_timer_registry_statistics():
    registry = TimerRegistry()
    registry.record("solve", 1.0)
    registry.record("solve", 3.0)
    registry.record("other", 0.5)

    stats = registry.snapshot()
    assert stats["solve"]["count"] == 2
    assert stats["solve"]["total"] == pytest.approx(4.0)
    assert stats["solve"]["mean"] == pytest.approx(2.0)
    assert stats["solve"]["max"] == pytest.approx(3.0)
    assert stats["other"]["count"] == 1


def test_reporter_is_abstract():
    with pytest.raises(TypeError):
        Reporter()


def test_empty_timer_mean():
    assert TimerRegistry().timer("solve").mean == 0.0
