"""Recommended labels and normalisation of names, labels and annotations."""

from __future__ import annotations

import re
import string
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nodeops.kube.objects import ObjectMeta

CONTROLLER_LABEL = "app.kubernetes.io/created-by"
INSTANCE_LABEL = "app.kubernetes.io/instance"
NAME_LABEL = "app.kubernetes.io/name"
VERSION_LABEL = "app.kubernetes.io/version"
COMPONENT_LABEL = "app.kubernetes.io/component"

# Orders resources; the value must be a base 10 integer string.
ORDINAL_ANNOTATION = "app.kubernetes.io/ordinal"

CONTROLLER_OWNER_FIELD = ".metadata.controller"

_ALNUM = frozenset(string.ascii_letters + string.digits)
_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def to_integer_value(n: int) -> str:
    """Convert an integer to a base 10 string."""
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"expected an integer, got {type(n).__name__}")
    return str(n)


def must_to_int(s: str) -> int:
    """Parse a base 10, 64-bit integer; raise ValueError on failure."""
    if not _INT_RE.fullmatch(s):
        raise ValueError(f"parsing {s!r}: invalid syntax")
    n = int(s)
    if not _INT64_MIN <= n <= _INT64_MAX:
        raise ValueError(f"parsing {s!r}: value out of range")
    return n


def to_label_key(val: str) -> str:
    """Normalise val to a label key of at most 63 characters."""
    return _normalize_value(val, 63, "-_./")


def to_name(val: str) -> str:
    """Normalise val to a resource name of at most 253 characters."""
    return _normalize_value(val, 253, "-.")


def normalize_metadata(meta: ObjectMeta) -> None:
    """Normalise the name, label and annotation keys, and trim their values, in place."""
    meta.name = to_name(meta.name)
    meta.annotations = {
        to_label_key(k): _trim_middle(v, 63) for k, v in (meta.annotations or {}).items()
    }
    meta.labels = {to_label_key(k): _trim_middle(v, 63) for k, v in (meta.labels or {}).items()}


def _normalize_value(val: str, limit: int, allowed: str) -> str:
    kept = "".join(c for c in val if c in _ALNUM or c in allowed)
    return _trim_middle(kept.strip(allowed), limit)


def _trim_middle(val: str, limit: int) -> str:
    """Cut the middle out of val, keeping its prefix and suffix."""
    if len(val) <= limit:
        return val
    left = limit // 2
    right = limit - left
    return val[:left] + val[len(val) - right :]