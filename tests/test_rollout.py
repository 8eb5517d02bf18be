import itertools

import pytest

from nodeops.kube.rollout import compute_rollout


@pytest.mark.parametrize(
    "unavail, desired, ready, want",
    [
        (1, 1, 1, 1),
        (1, 10, 10, 1),
        (5, 10, 10, 5),
        (5, 10, 0, 0),
        ("44%", 10, 0, 0),
        ("50%", 3, 3, 1),
        (3, 9, 3, 0),
        (3, 9, 5, 0),
        (3, 9, 7, 1),
        (3, 9, 8, 2),
        ("35%", 9, 4, 0),
        ("35%", 9, 6, 0),
        ("35%", 9, 7, 1),
        ("35%", 9, 8, 2),
        ("33%", 9, 8, 1),
        (10, 10, 10, 10),
        (20, 10, 10, 10),
        (20, 10, 0, 10),
        ("100%", 10, 10, 10),
        ("200%", 10, 10, 10),
        ("200%", 10, 0, 10),
        (0, 100, 100, 1),
        (0, 100, 99, 0),
        ("0%", 100, 100, 1),
        ("0%", 100, 99, 0),
        (10, 0, 0, 0),
        (10, 0, 10, 0),
    ],
)
def test_compute_rollout(unavail, desired, ready, want):
    assert compute_rollout(unavail, desired, ready) == want


def test_defaults_to_25_percent():
    assert compute_rollout(None, 4, 4) == 1
    assert compute_rollout(None, 4, 3) == 0
    assert compute_rollout(None, 100, 100) == 25
    assert compute_rollout(None, 10, 9) == 1
    assert compute_rollout(None, 10, 8) == 0


def test_never_exceeds_desired():
    for max_unavail, desired, ready in itertools.product(range(0, 25, 3), range(1, 25, 2), range(0, 30, 3)):
        got = compute_rollout(max_unavail, desired, ready)
        assert got <= desired, (got, max_unavail, desired, ready)


@pytest.mark.parametrize("desired, ready", [(-1, 0), (0, -1)])
def test_negative_counts_raise(desired, ready):
    with pytest.raises(ValueError, match="must be >= 0"):
        compute_rollout(1, desired, ready)


def test_string_without_percent_raises():
    with pytest.raises(ValueError, match="not a percentage"):
        compute_rollout("5", 10, 10)