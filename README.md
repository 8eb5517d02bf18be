# nodeops

`nodeops` is a library of building blocks for keeping blockchain full nodes running on Kubernetes. You call its pieces from your own controller code. It uses only the standard library.

## Installation

```
pip install nodeops
```

To run the tests:

```
pip install "nodeops[test]"
pytest
```

## Contents

### `nodeops.kube`

General helpers for Kubernetes resources.

- `nodeops.kube.errors`
  - `ReconcileError` wraps an error and records in its `transient` attribute whether the error may be retried. `transient_error` and `unrecoverable_error` create one.
  - `ReconcileErrors` collects several. It offers `append`, `any` and `is_transient`, and its message joins the messages of the errors it holds with `"; "`.
  - `is_not_found`, `ignore_not_found`, `is_already_exists` and `ignore_already_exists` recognise `NotFoundError` and `AlreadyExistsError`, including when they are the cause of another error.
- `nodeops.kube.labels`
  - `to_label_key` keeps a value to at most 63 characters and `to_name` keeps it to at most 253. Both cut out the middle of a value that is too long.
  - `normalize_metadata` applies these limits to an `ObjectMeta` in place.
  - `to_integer_value` formats an integer and `must_to_int` parses a 64-bit integer, raising `ValueError` on failure.
  - The module also defines the recommended label keys, such as `NAME_LABEL` and `COMPONENT_LABEL`.
- `nodeops.kube.image`: `parse_image_version("busybox:stable")` returns `"stable"`. It returns `"latest"` when the reference has no tag.
- `nodeops.kube.objects`: the dataclasses `ObjectMeta`, `OwnerReference`, `Job`, `JobStatus` and `JobCondition`, and these functions:
  - `set_controller_reference` makes an owner the controller of an object.
  - `find_or_default_copy` deep-copies the matching object by name and namespace, or the comparator when none matches.
  - `index_owner(kind)` builds an indexer that returns the controlling owner's name.
  - `create_or_update(client, obj)` calls `client.create(obj)`, and falls back to `client.update(obj)` if the object already exists.
  - `is_job_finished` is true when a job has completed or failed.
- `nodeops.kube.pod`: `Pod` and `PodCondition`. `is_pod_available(pod, min_ready, now)` is true when the pod is ready and has been ready for longer than `min_ready`. `available_pods` filters a list of pods by the same test.
- `nodeops.kube.rollout`: `compute_rollout(max_unavail, desired, ready)` returns how many replicas may be updated while staying within the max-unavailable budget. The budget is an int or a percentage string and defaults to `"25%"`.
- `nodeops.kube.volume_snapshot`: `VolumeSnapshot` and `VolumeSnapshotStatus`. `volume_snapshot_is_ready` checks a single status. `recent_volume_snapshot(lister, namespace, selector)` returns the newest ready snapshot, or raises `LookupError` when none is ready.
- `nodeops.kube.reporter`: `EventReporter` logs through a `logging.Logger` and records events through a recorder object that has an `event(resource, type, reason, message)` method.

### `nodeops.healthcheck`

WSGI applications for a health-check sidecar, and a client for them.

- `nodeops.healthcheck.disk_usage`
  - `disk_usage_app` reads the `dir` query parameter and answers with a JSON `DiskUsageResponse` giving the total and free bytes of that directory's filesystem. It answers 400 when `dir` is missing and 500 when the directory cannot be examined.
  - `PORT` is 1251.
- `nodeops.healthcheck.comet.Comet(logger, client, rpc_host, timeout)` calls `client.status(rpc_host, timeout=...)` and answers with:
  - 200 when the node is in sync
  - 422 while it is catching up
  - 503 when the status call fails

  It logs only when the status code changes.
- `nodeops.healthcheck.client.Client.disk_usage(host, home_dir)` queries `http://<host>:1251/disk`. It raises `HealthcheckError` when the request fails, the JSON is malformed, the response carries an error, or the byte count is zero. The HTTP call defaults to `urllib.request.urlopen`; you can pass a different one.

### `nodeops.statefuljob`

Jobs that run against a volume restored from a snapshot.

- `nodeops.statefuljob.spec`
  - `StatefulJob`, `JobTemplate` and `VolumeClaimTemplate` describe the job.
  - `resource_name` and `default_labels` give the name and labels of the resources created for it.
  - `ready_for_snapshot(crd, now)` is true when the interval has passed since the newest job started. The interval defaults to 24 hours.
- `nodeops.statefuljob.builders`
  - `build_jobs(crd)` builds the job. It mounts the restored volume as `snapshot`, defaults the restart policy to `Never`, and sets these defaults: a deadline of 24 hours, a backoff limit of 5, and a TTL of 15 minutes.
  - `build_pvcs(crd, vs)` builds a `PersistentVolumeClaim` from the snapshot. It raises `ValueError` when the snapshot has no restore size.
- `nodeops.statefuljob.active_job`
  - `find_active_job(getter, crd)` returns the job, or `None` if it is not found.
  - `Creator(client, builder).create(crd)` creates the built resources and makes the StatefulJob their controller.
- `nodeops.statefuljob.job_list`
  - `add_job_status` keeps a history of at most five entries, newest first.
  - `update_job_status` replaces the newest entry.

### `nodeops.fullnode`

- `nodeops.fullnode.status_client.StatusClient(client).sync_update(key, update)` does three things: it fetches the object with `client.get(key)`, applies `update` to its `status`, and writes the result with `client.update_status`. Updates for the same key run one at a time.

### `nodeops.version`

- `docker_tag()` returns the build version, or `"latest"`.
- `app_version()` returns the build version, or `"(devel)"`.

## Example

```python
from nodeops.kube.rollout import compute_rollout
from nodeops.kube.labels import to_name

compute_rollout(None, 100, 100)   # 25
to_name("HUB!@+=_.0")             # "HUB.0"
```

## What it does not do

`nodeops` holds no Kubernetes API client, controller or reconcile loop. The objects it builds are plain dataclasses and dicts, and the clients, getters, listers and recorders it calls are ones you supply. It starts no server: the health-check applications are WSGI callables for you to mount in a WSGI server of your choice. It installs no command-line program.