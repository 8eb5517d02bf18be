"""Pod readiness and availability."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from nodeops.kube.objects import CONDITION_TRUE, ObjectMeta

POD_READY = "Ready"
POD_SCHEDULED = "PodScheduled"
POD_INITIALIZED = "Initialized"
CONTAINERS_READY = "ContainersReady"


@dataclass
class PodCondition:
    type: str = ""
    status: str = ""
    last_transition_time: datetime | None = None


@dataclass
class Pod:
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    conditions: list[PodCondition] = field(default_factory=list)


def _ready_condition(pod: Pod) -> PodCondition | None:
    return next((c for c in pod.conditions if c.type == POD_READY), None)


def is_pod_available(pod: Pod, min_ready: timedelta, now: datetime) -> bool:
    """True if the pod is ready and has been ready for longer than min_ready."""
    condition = _ready_condition(pod)
    if condition is None or condition.status != CONDITION_TRUE:
        return False
    if not min_ready:
        return True
    ltt = condition.last_transition_time
    return ltt is not None and ltt + min_ready < now


def available_pods(pods: Iterable[Pod], min_ready: timedelta, now: datetime) -> list[Pod]:
    """Return the pods that are available as defined by is_pod_available."""
    return [pod for pod in pods if is_pod_available(pod, min_ready, now)]