"""Rollout sizing within a max-unavailable budget."""

from __future__ import annotations

DEFAULT_MAX_UNAVAILABLE = "25%"


def _scaled_value(value: int | str, total: int) -> int:
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        if not value.endswith("%"):
            raise ValueError(
                "invalid value for IntOrString: invalid type: string is not a percentage"
            )
        try:
            percent = int(value[:-1])
        except ValueError as exc:
            raise ValueError(f"invalid value {value!r}: {exc}") from exc
        return percent * total // 100
    raise TypeError(f"expected int or percentage string, got {type(value).__name__}")


def compute_rollout(max_unavail: int | str | None, desired: int, ready: int) -> int:
    """Return how many replicas may be updated while staying within max_unavail.

    max_unavail is an int or a percentage string such as "25%"; None means 25%.
    """
    if desired < 0:
        raise ValueError("desired must be >= 0")
    if ready < 0:
        raise ValueError("ready must be >= 0")

    if max_unavail is None:
        max_unavail = DEFAULT_MAX_UNAVAILABLE
    unavail = max(_scaled_value(max_unavail, desired), 1)

    min_avail = desired - unavail
    if ready <= min_avail:
        return 0
    return min(unavail - (desired - ready), desired)