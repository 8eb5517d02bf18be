"""Builders for the jobs and volume claims of a StatefulJob."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field

from nodeops.kube.objects import Job, ObjectMeta
from nodeops.kube.volume_snapshot import VolumeSnapshot
from nodeops.statefuljob.spec import StatefulJob, default_labels, resource_name

DEFAULT_ACTIVE_DEADLINE_SECONDS = 24 * 60 * 60
DEFAULT_BACKOFF_LIMIT = 5
DEFAULT_TTL_SECONDS_AFTER_FINISHED = 15 * 60


@dataclass
class PersistentVolumeClaim:
    """A claim for storage, optionally restored from a data source."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    storage_class_name: str | None = None
    access_modes: list[str] = field(default_factory=list)
    data_source: dict[str, str] | None = None
    requests: dict[str, str] = field(default_factory=dict)
    kind: str = "PersistentVolumeClaim"
    api_version: str = "v1"


def build_jobs(crd: StatefulJob) -> list[Job]:
    """Return the job that runs against the restored snapshot volume."""
    name = resource_name(crd)
    template = crd.job_template
    pod_template = copy.deepcopy(crd.pod_template)

    pod_spec = pod_template.setdefault("spec", {})
    pod_spec.setdefault("volumes", []).append(
        {"name": "snapshot", "persistentVolumeClaim": {"claimName": name}}
    )
    if not pod_spec.get("restartPolicy"):
        pod_spec["restartPolicy"] = "Never"

    spec = {
        "activeDeadlineSeconds": template.active_deadline_seconds
        if template.active_deadline_seconds is not None
        else DEFAULT_ACTIVE_DEADLINE_SECONDS,
        "backoffLimit": template.backoff_limit
        if template.backoff_limit is not None
        else DEFAULT_BACKOFF_LIMIT,
        "ttlSecondsAfterFinished": template.ttl_seconds_after_finished
        if template.ttl_seconds_after_finished is not None
        else DEFAULT_TTL_SECONDS_AFTER_FINISHED,
        "template": pod_template,
    }

    job = Job(
        metadata=ObjectMeta(name=name, namespace=crd.metadata.namespace, labels=default_labels()),
        spec=spec,
    )
    return [job]


def _find_storage(vs: VolumeSnapshot) -> str:
    if vs.status is None:
        raise ValueError(f"{vs.kind} {vs.metadata.name}: missing status subresource")
    if vs.status.restore_size is None:
        raise ValueError(f"{vs.kind} {vs.metadata.name}: missing status.restoreSize")
    return vs.status.restore_size


def build_pvcs(crd: StatefulJob, vs: VolumeSnapshot) -> list[PersistentVolumeClaim]:
    """Return the claim restored from the volume snapshot.

    Raises ValueError if the snapshot has no restore size.
    """
    storage = _find_storage(vs)
    claim_template = crd.volume_claim_template
    pvc = PersistentVolumeClaim(
        metadata=ObjectMeta(
            name=resource_name(crd),
            namespace=crd.metadata.namespace,
            labels=default_labels(),
        ),
        storage_class_name=claim_template.storage_class_name,
        access_modes=list(claim_template.access_modes),
        data_source={
            "apiGroup": vs.api_version.rpartition("/")[0],
            "kind": vs.kind,
            "name": vs.metadata.name,
        },
        requests={"storage": storage},
    )
    return [pvc]