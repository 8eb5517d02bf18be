"""Bounded job status history, most recent first."""

from __future__ import annotations

from collections.abc import Sequence

from nodeops.kube.objects import JobStatus

MAX_HISTORY = 5


def add_job_status(existing: Sequence[JobStatus] | None, status: JobStatus) -> list[JobStatus]:
    """Put status at the head of the history, keeping at most five entries."""
    return [status, *(existing or ())][:MAX_HISTORY]


def update_job_status(
    existing: Sequence[JobStatus] | None, status: JobStatus
) -> list[JobStatus]:
    """Replace the most recent status; an empty history is returned unchanged."""
    if not existing:
        return list(existing or ())
    return [status, *existing[1:]]