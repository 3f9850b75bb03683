"""Runs a board command end to end: classify, apply, describe the outcome.

The parser only produces directives. Looking up the company, validating the
target and writing to the board all happen here, and every outcome (including
"nothing was done because X is missing") comes back as an ``AgentReply``.
"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional

import pytz

from .board import BoardStore, append_note, find_job_by_company, move_job, set_follow_up
from .models import INTERVIEW, OFFER, Intent, Job, ParsedCommand
from .nlp_rules import classify_intent, resolve_status

logger = logging.getLogger(__name__)

EXAMPLE_COMMANDS = [
    "today / bugun",
    "weekly plan",
    "move Company A to Interview",
    "followup Company A 2025-01-10",
    "note Company A: recruiter asked for portfolio",
]


@dataclass
class AgentReply:
    parsed: ParsedCommand
    title: str
    lines: List[str] = field(default_factory=list)
    tips: List[str] = field(default_factory=list)
    executed: bool = False

    @property
    def intent(self) -> Intent:
        return self.parsed.intent


def today_in(tz_name: str) -> date:
    return datetime.now(pytz.timezone(tz_name)).date()


def _parse_iso(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        return None


def _label(job: Job) -> str:
    return f"{job.company} ({job.role})" if job.role else job.company


def build_today(jobs: List[Job], today: date) -> Dict[str, List[str]]:
    overdue, due_today = [], []
    for job in jobs:
        due = _parse_iso(job.follow_up_at)
        if due is None:
            continue
        if due < today:
            overdue.append(job)
        elif due == today:
            due_today.append(job)
    in_interview = [j for j in jobs if j.status == INTERVIEW]

    priorities = [_label(j) for j in (overdue + due_today + in_interview)[:5]]
    lines = [
        f"Overdue follow-ups: {len(overdue)}",
        f"Follow-ups today: {len(due_today)}",
        f"In Interview: {len(in_interview)}",
    ]
    if priorities:
        lines.append("Top priorities:")
        lines.extend(f"- {p}" for p in priorities)
    else:
        lines.append("No urgent items")
    return {
        "lines": lines,
        "tips": [
            'Try: "weekly plan"',
            'Try: "move Company A to Interview"',
            'Try: "followup Company A 2025-01-10"',
            'Try: "note Company A: recruiter asked for portfolio"',
        ],
    }


def build_weekly_plan(jobs: List[Job], today: date) -> List[str]:
    horizon = today + timedelta(days=6)
    by_day: Dict[date, List[Job]] = {}
    overdue = 0
    for job in jobs:
        due = _parse_iso(job.follow_up_at)
        if due is None:
            continue
        if due < today:
            overdue += 1
        elif due <= horizon:
            by_day.setdefault(due, []).append(job)

    lines = []
    for day in sorted(by_day):
        names = ", ".join(_label(j) for j in by_day[day])
        lines.append(f"{day.isoformat()} ({day.strftime('%a')}): follow up {names}")
    if not lines:
        lines.append("No follow-ups scheduled this week")
    if overdue:
        lines.append(f"Overdue follow-ups to clear first: {overdue}")
    lines.append(f"In Interview: {sum(1 for j in jobs if j.status == INTERVIEW)}")
    lines.append(f"Offers: {sum(1 for j in jobs if j.status == OFFER)}")
    return lines


def _not_found(parsed: ParsedCommand, what: str) -> AgentReply:
    return AgentReply(
        parsed=parsed,
        title=f"{what} not executed",
        lines=[
            f"No job matches '{parsed.company}'.",
            "Tip: use exact company name or a unique part of it.",
        ],
    )


def _missing(parsed: ParsedCommand, what: str, field_name: str, hint: str) -> AgentReply:
    return AgentReply(
        parsed=parsed,
        title=f"{what} not executed",
        lines=[f"Could not execute, missing {field_name}.", hint],
    )


def _run_move(parsed: ParsedCommand, store: BoardStore) -> AgentReply:
    if not parsed.actions:
        return AgentReply(
            parsed=parsed,
            title="Move not executed",
            lines=[
                "I recognized MOVE, but couldn't match the company/status.",
                'Tip: "move Company A to Interview" or "Company A -> Offer".',
            ],
        )
    if not parsed.company:
        return _missing(parsed, "Move", "company", 'Tip: "move Company A to Interview".')
    # remote results may carry a raw status word
    to = resolve_status(parsed.to) if parsed.to else None
    if to is None:
        return _missing(parsed, "Move", "status", "Use Applied, Interview, Offer or Rejected.")
    jobs = store.get()
    job = find_job_by_company(jobs, parsed.company)
    if job is None:
        return _not_found(parsed, "Move")
    store.set(move_job(jobs, job.id, to))
    logger.info("Moved %s to %s", job.company, to)
    return AgentReply(
        parsed=parsed,
        title="Move executed",
        lines=[f"{job.company} moved to {to}."],
        tips=['Try: "today"'],
        executed=True,
    )


def _run_followup(parsed: ParsedCommand, store: BoardStore) -> AgentReply:
    if not parsed.company:
        return _missing(parsed, "Follow-up", "company", 'Tip: "followup Company A 2025-01-10".')
    if not parsed.date:
        return _missing(parsed, "Follow-up", "date", "Dates must look like YYYY-MM-DD.")
    if _parse_iso(parsed.date) is None:
        return AgentReply(
            parsed=parsed,
            title="Follow-up not executed",
            lines=[f"{parsed.date} is not a valid calendar date."],
        )
    jobs = store.get()
    job = find_job_by_company(jobs, parsed.company)
    if job is None:
        return _not_found(parsed, "Follow-up")
    store.set(set_follow_up(jobs, job.id, parsed.date))
    logger.info("Follow-up for %s set to %s", job.company, parsed.date)
    return AgentReply(
        parsed=parsed,
        title="Follow-up set",
        lines=[f"{job.company} follow-up -> {parsed.date}"],
        executed=True,
    )


def _run_note(parsed: ParsedCommand, store: BoardStore) -> AgentReply:
    if not parsed.company:
        return _missing(parsed, "Note", "company", 'Tip: "note Company A: text".')
    if not parsed.text:
        return _missing(parsed, "Note", "text", 'Tip: "note Company A: text".')
    jobs = store.get()
    job = find_job_by_company(jobs, parsed.company)
    if job is None:
        return _not_found(parsed, "Note")
    store.set(append_note(jobs, job.id, parsed.text))
    logger.info("Note added to %s", job.company)
    return AgentReply(
        parsed=parsed,
        title="Note saved",
        lines=[f"{job.company}: note added."],
        executed=True,
    )


_WRITERS = {
    Intent.MOVE: _run_move,
    Intent.FOLLOWUP: _run_followup,
    Intent.NOTE: _run_note,
}


def run_command(
    command: str,
    store: BoardStore,
    today: Optional[date] = None,
    read_only: bool = False,
    parsed: Optional[ParsedCommand] = None,
    tz_name: str = "UTC",
) -> AgentReply:
    """Classify ``command`` (unless ``parsed`` is given) and apply it to ``store``."""
    parsed = parsed or classify_intent(command)
    today = today or today_in(tz_name)

    if parsed.intent == Intent.TODAY:
        snapshot = build_today(store.get(), today)
        return AgentReply(parsed=parsed, title="Today snapshot", **snapshot)
    if parsed.intent == Intent.WEEKLY_PLAN:
        return AgentReply(
            parsed=parsed,
            title="Weekly plan",
            lines=build_weekly_plan(store.get(), today),
        )

    writer = _WRITERS.get(parsed.intent)
    if writer is None:
        return AgentReply(
            parsed=parsed,
            title="I didn't understand",
            lines=["Try one of these:"],
            tips=list(EXAMPLE_COMMANDS),
        )
    if read_only:
        return AgentReply(
            parsed=parsed,
            title="Read-only view",
            lines=[f"{parsed.intent.value} recognized, but the board is read-only."],
        )
    return writer(parsed, store)
