"""Minimal resource objects and helpers for owned resources and jobs."""

from __future__ import annotations

import copy
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol, TypeVar

from nodeops.kube.errors import is_already_exists

GROUP = "cosmos.bharvest"
VERSION = "v1"
GROUP_VERSION = f"{GROUP}/{VERSION}"

CONDITION_TRUE = "True"
CONDITION_FALSE = "False"
CONDITION_UNKNOWN = "Unknown"

JOB_COMPLETE = "Complete"
JOB_FAILED = "Failed"
JOB_SUSPENDED = "Suspended"


@dataclass
class OwnerReference:
    """A reference from a resource to the object that owns it."""

    api_version: str
    kind: str
    name: str
    uid: str = ""
    controller: bool | None = None
    block_owner_deletion: bool | None = None


@dataclass
class ObjectMeta:
    """Name, namespace, labels, annotations and owners of a resource."""

    name: str = ""
    namespace: str = ""
    labels: dict[str, str] | None = None
    annotations: dict[str, str] | None = None
    owner_references: list[OwnerReference] = field(default_factory=list)
    uid: str = ""


@dataclass
class JobCondition:
    type: str = ""
    status: str = ""


@dataclass
class JobStatus:
    conditions: list[JobCondition] = field(default_factory=list)
    active: int = 0
    succeeded: int = 0
    failed: int = 0
    start_time: datetime | None = None
    completion_time: datetime | None = None


@dataclass
class Job:
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: dict[str, Any] = field(default_factory=dict)
    status: JobStatus = field(default_factory=JobStatus)
    kind: str = "Job"
    api_version: str = "batch/v1"


class _HasMetadata(Protocol):
    metadata: ObjectMeta


T = TypeVar("T", bound=_HasMetadata)


def _group(api_version: str) -> str:
    return api_version.rpartition("/")[0]


def _controller_of(meta: ObjectMeta) -> OwnerReference | None:
    return next((ref for ref in meta.owner_references if ref.controller), None)


def set_controller_reference(
    owner_meta: ObjectMeta, owner_kind: str, owner_api_version: str, obj_meta: ObjectMeta
) -> None:
    """Make the owner the controller of the object.

    Raises ValueError if the object is already controlled by a different owner
    or if the owner's namespace does not allow it.
    """
    if owner_meta.namespace:
        if not obj_meta.namespace:
            raise ValueError(
                f"cluster-scoped resource must not have a namespace-scoped owner, "
                f"owner's namespace {owner_meta.namespace}"
            )
        if obj_meta.namespace != owner_meta.namespace:
            raise ValueError(
                f"cross-namespace owner references are disallowed, owner's namespace "
                f"{owner_meta.namespace}, obj's namespace {obj_meta.namespace}"
            )

    ref = OwnerReference(
        api_version=owner_api_version,
        kind=owner_kind,
        name=owner_meta.name,
        uid=owner_meta.uid,
        controller=True,
        block_owner_deletion=True,
    )

    def same_owner(other: OwnerReference) -> bool:
        return (
            _group(other.api_version) == _group(ref.api_version)
            and other.kind == ref.kind
            and other.name == ref.name
        )

    existing = _controller_of(obj_meta)
    if existing is not None and not same_owner(existing):
        raise ValueError(
            f"Object {obj_meta.namespace}/{obj_meta.name} is already owned by another "
            f"{existing.kind} controller {existing.name}"
        )

    for i, other in enumerate(obj_meta.owner_references):
        if same_owner(other):
            obj_meta.owner_references[i] = ref
            return
    obj_meta.owner_references.append(ref)


def find_or_default_copy(existing: Sequence[T], comparator: T) -> T:
    """Deep-copy the item matching comparator by name and namespace, else copy comparator.

    Labels and annotations of the copy default to empty dicts.
    """
    key = (comparator.metadata.name, comparator.metadata.namespace)
    found = next(
        (item for item in existing if (item.metadata.name, item.metadata.namespace) == key),
        comparator,
    )
    result = copy.deepcopy(found)
    if result.metadata.labels is None:
        result.metadata.labels = {}
    if result.metadata.annotations is None:
        result.metadata.annotations = {}
    return result


def index_owner(kind: str) -> Callable[[_HasMetadata], list[str] | None]:
    """Build an indexer returning the controlling owner's name for resources of this group and kind."""

    def index(obj: _HasMetadata) -> list[str] | None:
        owner = _controller_of(obj.metadata)
        if owner is None:
            return None
        if owner.api_version != GROUP_VERSION or owner.kind != kind:
            return None
        return [owner.name]

    return index


class _Writer(Protocol):
    def create(self, obj: Any) -> None: ...

    def update(self, obj: Any) -> None: ...


def create_or_update(client: _Writer, obj: Any) -> None:
    """Create obj; if it already exists, update it instead."""
    try:
        client.create(obj)
    except Exception as err:
        if not is_already_exists(err):
            raise
        client.update(obj)


def is_job_finished(job: Job) -> bool:
    """True if the job has completed or failed."""
    return any(
        c.type in (JOB_COMPLETE, JOB_FAILED) and c.status == CONDITION_TRUE
        for c in job.status.conditions
    )