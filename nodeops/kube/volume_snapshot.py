"""Volume snapshot readiness and selection."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

from nodeops.kube.objects import ObjectMeta


@dataclass
class VolumeSnapshotStatus:
    ready_to_use: bool | None = None
    creation_time: datetime | None = None
    restore_size: str | None = None


@dataclass
class VolumeSnapshot:
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    status: VolumeSnapshotStatus | None = None
    kind: str = "VolumeSnapshot"
    api_version: str = "snapshot.storage.k8s.io/v1"


class Lister(Protocol):
    def list(self, namespace: str, labels: Mapping[str, str]) -> Iterable[VolumeSnapshot]: ...


def volume_snapshot_is_ready(status: VolumeSnapshotStatus | None) -> bool:
    """True if the snapshot is ready to use."""
    return status is not None and bool(status.ready_to_use)


def _creation_key(snapshot: VolumeSnapshot) -> tuple:
    created = snapshot.status.creation_time if snapshot.status else None
    return (False,) if created is None else (True, created)


def recent_volume_snapshot(
    lister: Lister, namespace: str, selector: Mapping[str, str]
) -> VolumeSnapshot:
    """Return the most recently created, ready to use snapshot.

    Raises LookupError if none is ready.
    """
    ready = [
        s for s in lister.list(namespace=namespace, labels=selector)
        if volume_snapshot_is_ready(s.status)
    ]
    if not ready:
        raise LookupError("no ready to use VolumeSnapshots found")
    return max(ready, key=_creation_key)