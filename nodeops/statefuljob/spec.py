"""The StatefulJob resource, its naming, labels and schedule."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from nodeops.kube.labels import COMPONENT_LABEL, CONTROLLER_LABEL, to_name
from nodeops.kube.objects import GROUP, JobStatus, ObjectMeta

STATEFUL_JOB_CONTROLLER = "StatefulJob"
API_VERSION = f"{GROUP}/v1alpha1"
DEFAULT_INTERVAL = timedelta(hours=24)


@dataclass
class JobTemplate:
    """Overrides for the job created from a StatefulJob."""

    active_deadline_seconds: int | None = None
    backoff_limit: int | None = None
    ttl_seconds_after_finished: int | None = None


@dataclass
class VolumeClaimTemplate:
    """Settings for the claim restored from a volume snapshot."""

    storage_class_name: str = ""
    access_modes: list[str] = field(default_factory=list)


@dataclass
class StatefulJob:
    """Runs a job periodically against a volume restored from a snapshot."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    job_template: JobTemplate = field(default_factory=JobTemplate)
    pod_template: dict[str, Any] = field(default_factory=dict)
    volume_claim_template: VolumeClaimTemplate = field(default_factory=VolumeClaimTemplate)
    interval: timedelta = timedelta(0)
    job_history: list[JobStatus] = field(default_factory=list)
    kind: str = STATEFUL_JOB_CONTROLLER
    api_version: str = API_VERSION


def resource_name(crd: StatefulJob) -> str:
    """Name shared by every resource the controller creates."""
    return to_name(crd.metadata.name)


def default_labels() -> dict[str, str]:
    """Labels on every resource the controller creates."""
    return {
        CONTROLLER_LABEL: "cosmos-operator",
        COMPONENT_LABEL: STATEFUL_JOB_CONTROLLER,
    }


def ready_for_snapshot(crd: StatefulJob, now: datetime) -> bool:
    """True if enough time has passed since the most recent job started."""
    if not crd.job_history:
        return True

    interval = crd.interval if crd.interval > timedelta(0) else DEFAULT_INTERVAL
    started = crd.job_history[0].start_time
    if started is None:
        raise ValueError("most recent job status has no start time")
    return now - started >= interval