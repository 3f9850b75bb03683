import json
import logging
import os
import re
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional

from .models import APPLIED, STATUSES, Job
from .text_utils import contains_normalized

logger = logging.getLogger(__name__)

Listener = Callable[[List[Job]], None]

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _now_ms() -> int:
    return int(time.time() * 1000)


def _follow_up_date(value: Any) -> Optional[str]:
    # older boards stored follow-ups as epoch ms
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc).date().isoformat()
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str) and ISO_DATE_RE.match(value):
        try:
            return datetime.strptime(value, "%Y-%m-%d").date().isoformat()
        except ValueError:
            return None
    return None


def _int_or_zero(value: Any) -> int:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return int(value)
        except (OverflowError, ValueError):
            return 0
    return 0


def sanitize_jobs(raw: List[Any]) -> List[Job]:
    jobs: List[Job] = []
    for item in raw or []:
        data = item.to_dict() if isinstance(item, Job) else item
        if not isinstance(data, dict):
            continue
        data = {k: data[k] for k in Job.__dataclass_fields__ if k in data}
        data.setdefault("role", "")
        if not all(isinstance(data.get(k), str) for k in ("id", "company", "role")):
            continue
        if not data["id"] or not data["company"]:
            continue
        for key in ("location", "link", "notes"):
            if not isinstance(data.get(key, ""), str):
                data[key] = ""
        for key in ("created_at", "updated_at"):
            data[key] = _int_or_zero(data.get(key))
        data["follow_up_at"] = _follow_up_date(data.get("follow_up_at"))
        if data.get("status") not in STATUSES:
            data["status"] = APPLIED
        jobs.append(Job(**data))
    return jobs


def load_jobs(path: str) -> List[Job]:
    if not os.path.exists(path):
        return []
    try:
        with open(path, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Could not read board file %s: %s", path, e)
        return []
    jobs = stored.get("jobs") if isinstance(stored, dict) else None
    return sanitize_jobs(jobs if isinstance(jobs, list) else [])


def save_jobs(path: str, jobs: List[Job]) -> None:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump({"jobs": [j.to_dict() for j in jobs]}, f, indent=2, ensure_ascii=False)


def find_job_by_company(jobs: List[Job], company: Optional[str]) -> Optional[Job]:
    if not company:
        return None
    for job in jobs:
        if contains_normalized(job.company, company):
            return job
    return None


def _replace(jobs: List[Job], job_id: str, **changes: Any) -> List[Job]:
    out = []
    for job in jobs:
        if job.id == job_id:
            data = job.to_dict()
            data.update(changes, updated_at=_now_ms())
            job = Job.from_dict(data)
        out.append(job)
    return out


def move_job(jobs: List[Job], job_id: str, status: str) -> List[Job]:
    if status not in STATUSES:
        raise ValueError(f"Unknown status: {status!r}")
    return _replace(jobs, job_id, status=status)


def set_follow_up(jobs: List[Job], job_id: str, date: str) -> List[Job]:
    return _replace(jobs, job_id, follow_up_at=date)


def append_note(jobs: List[Job], job_id: str, text: str) -> List[Job]:
    job = next((j for j in jobs if j.id == job_id), None)
    if job is None:
        return list(jobs)
    merged = f"{job.notes}\n\n{text}" if job.notes else text
    return _replace(jobs, job_id, notes=merged)


class BoardStore:
    """JSON-file backed job list with subscribers and a one-step undo.

    Every ``set`` replaces the whole collection and rewrites the file.
    """

    def __init__(self, path: str):
        self.path = path
        self._jobs: List[Job] = load_jobs(path)
        self._previous: Optional[List[Job]] = None
        self._listeners: List[Listener] = []

    def get(self) -> List[Job]:
        return list(self._jobs)

    def set(self, jobs: List[Job], remember: bool = True) -> None:
        if remember:
            self._previous = self._jobs
        self._jobs = sanitize_jobs(jobs)
        save_jobs(self.path, self._jobs)
        for listener in list(self._listeners):
            listener(self.get())

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def can_undo(self) -> bool:
        return self._previous is not None

    def undo(self) -> bool:
        if self._previous is None:
            return False
        snapshot, self._previous = self._previous, None
        self.set(snapshot, remember=False)
        return True

    def add(self, company: str, role: str = "", status: str = APPLIED, **fields: Any) -> Job:
        now = _now_ms()
        job = Job.from_dict({
            "id": fields.pop("id", None) or str(uuid.uuid4()),
            "company": company,
            "role": role,
            "status": status,
            "created_at": now,
            "updated_at": now,
            **fields,
        })
        self.set(self._jobs + [job])
        return job
