import pytest

from duck.supervisor.backoff import BackoffState


def test_defaults_start_at_base():
    backoff = BackoffState()
    assert backoff.current == backoff.base_delay == 30.0
    assert backoff.factor == 5.0
    assert backoff.max_delay == 21600.0


def test_take_returns_current_then_grows():
    backoff = BackoffState(base_delay=30, factor=5, max_delay=21600)
    assert backoff.take() == 30
    assert backoff.current == 150


@pytest.mark.parametrize("failures", [1, 3, 6, 10])
def test_growth_matches_closed_form(failures):
    base, factor, cap = 30.0, 5.0, 21600.0
    backoff = BackoffState(base_delay=base, factor=factor, max_delay=cap)
    delays = [backoff.take() for _ in range(failures)]
    assert delays == [min(base * factor**i, cap) for i in range(failures)]
    assert delays == sorted(delays)
    assert max(delays) <= cap


def test_grow_clamps_to_cap():
    backoff = BackoffState(base_delay=10, factor=10, max_delay=50)
    assert backoff.grow() == 50
    assert backoff.grow() == 50


def test_reset_returns_to_base():
    backoff = BackoffState(base_delay=2, factor=3, max_delay=100)
    backoff.grow()
    backoff.grow()
    backoff.reset()
    assert backoff.current == 2


@pytest.mark.parametrize(
    "kwargs",
    [
        {"base_delay": -1},
        {"factor": 0.5},
        {"base_delay": 10, "max_delay": 5},
    ],
)
def test_invalid_parameters_rejected(kwargs):
    with pytest.raises(ValueError):
        BackoffState(**kwargs)
