"""Sending document batches to a Meilisearch index."""

from __future__ import annotations

import enum
import gzip
import json
import random
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass

import requests

from meili_importer.mime import Mime

CLIENT_NAME = "Meilisearch Importer"
_RETRIES = 20
_MIN_DELAY = 0.1
_MAX_DELAY = 60 * 60.0
_JITTER = 0.3
_TASK_POLL_INTERVAL = 0.5
_TIMEOUT = 30


class DocumentOperation(enum.Enum):
    """How uploaded documents are merged with existing ones."""

    ADD_OR_REPLACE = "add-or-replace"
    ADD_OR_UPDATE = "add-or-update"

    @property
    def http_method(self) -> str:
        return "POST" if self is DocumentOperation.ADD_OR_REPLACE else "PUT"

    def __str__(self) -> str:
        return self.value


class UploadError(Exception):
    """Raised when a batch could not be uploaded."""


@dataclass(frozen=True)
class UploadTarget:
    """The instance and index that documents are sent to."""

    url: str
    index: str
    primary_key: str | None = None
    api_key: str | None = None
    operation: DocumentOperation = DocumentOperation.ADD_OR_REPLACE

    def documents_url(self) -> str:
        url = f"{self.url}/indexes/{self.index}/documents"
        if self.primary_key is not None:
            url = f"{url}?primaryKey={self.primary_key}"
        return url

    def task_url(self, task_uid: int) -> str:
        return f"{self.url}/tasks/{task_uid}"

    def auth_headers(self) -> dict[str, str]:
        if self.api_key is None:
            return {}
        return {"Authorization": f"Bearer {self.api_key}"}


def _backoff_delays() -> Iterator[float]:
    for attempt in range(_RETRIES):
        delay = min(_MIN_DELAY * 2**attempt, _MAX_DELAY)
        yield delay * (1 - _JITTER * random.random())


def _task_uid(response: requests.Response) -> int | None:
    try:
        body = response.json()
    except ValueError:
        return None
    uid = body.get("taskUid") if isinstance(body, dict) else None
    if isinstance(uid, int) and not isinstance(uid, bool) and uid >= 0:
        return uid
    return None


def _wait_for_task(session, target: UploadTarget, task_uid: int, log, sleep) -> None:
    task_url = target.task_url(task_uid)
    while True:
        try:
            response = session.get(task_url, headers=target.auth_headers(), timeout=_TIMEOUT)
            response.raise_for_status()
        except requests.RequestException as err:
            log(f"Failed to query the task status: {err}, retrying...")
        else:
            try:
                task = response.json()
            except ValueError:
                task = {}
            if not isinstance(task, dict):
                task = {}
            status = task.get("status")
            if status == "succeeded":
                details = task.get("details")
                failed = details.get("failedDocuments") if isinstance(details, dict) else None
                if isinstance(failed, int) and not isinstance(failed, bool) and failed > 0:
                    log(
                        f"Warning: {failed} documents of the batch failed to import; "
                        "consider retrying them one by one or exporting them."
                    )
                return
            if status == "failed":
                log(f"Batch import task failed: {json.dumps(task)}")
                return
        sleep(_TASK_POLL_INTERVAL)


def send_batch(
    session: requests.Session,
    target: UploadTarget,
    mime: Mime,
    data: bytes,
    log: Callable[[str], object] = print,
    sleep: Callable[[float], object] = time.sleep,
) -> None:
    """Upload one gzip-compressed batch, retrying with exponential backoff.

    After a successful upload the resulting task is polled until it ends.
    Raises UploadError when every attempt failed.
    """
    url = target.documents_url()
    body = gzip.compress(data, compresslevel=6)
    headers = {
        "Content-Type": mime.content_type(),
        "Content-Encoding": "gzip",
        "X-Meilisearch-Client": CLIENT_NAME,
        **target.auth_headers(),
    }

    for attempt, delay in enumerate(_backoff_delays()):
        try:
            response = session.request(
                target.operation.http_method, url, data=body, headers=headers, timeout=_TIMEOUT
            )
        except requests.RequestException as err:
            log(f"Attempt #{attempt}: {err}")
            sleep(delay)
            continue

        if 200 <= response.status_code < 300:
            task_uid = _task_uid(response)
            if task_uid is None:
                log("Warning: could not read the taskUid of the batch import; its result is unconfirmed.")
            else:
                _wait_for_task(session, target, task_uid, log, sleep)
            return

        log(f"Attempt #{attempt}: {response.text}")
        sleep(delay)

    raise UploadError("Too many errors. Stopping the retries.")