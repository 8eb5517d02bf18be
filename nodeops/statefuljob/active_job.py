"""Lookup of the active job and creation of owned resources."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any, Generic, Protocol, TypeVar

from nodeops.kube.errors import is_not_found
from nodeops.kube.objects import Job, set_controller_reference
from nodeops.statefuljob.spec import StatefulJob, resource_name

_log = logging.getLogger(__name__)


class Getter(Protocol):
    def get(self, namespace: str, name: str) -> Job: ...


class CreateClient(Protocol):
    def create(self, obj: Any) -> None: ...


def find_active_job(getter: Getter, crd: StatefulJob) -> Job | None:
    """Return the job of the StatefulJob in any state, or None if it cannot be found."""
    try:
        return getter.get(namespace=crd.metadata.namespace, name=resource_name(crd))
    except Exception as err:
        if is_not_found(err):
            return None
        raise


def _group_kind(obj: Any) -> str:
    kind = getattr(obj, "kind", type(obj).__name__)
    group = getattr(obj, "api_version", "").rpartition("/")[0]
    return f"{kind}.{group}" if group else kind


T = TypeVar("T")


class Creator(Generic[T]):
    """Creates built resources and makes the StatefulJob their controller."""

    def __init__(self, client: CreateClient, builder: Callable[[], Iterable[T] | None]) -> None:
        self._client = client
        self._builder = builder

    def create(self, crd: StatefulJob) -> None:
        """Build the resources, create them, and set the owner reference."""
        try:
            resources = self._builder()
        except Exception as err:
            raise RuntimeError(f"build resources: {err}") from err

        for resource in resources or ():
            _log.info(
                "Creating resource groupKind=%s resource=%s",
                _group_kind(resource),
                resource.metadata.name,
            )
            self._client.create(resource)
            set_controller_reference(
                crd.metadata, crd.kind, crd.api_version, resource.metadata
            )