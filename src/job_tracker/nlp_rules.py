import re
from typing import Any, Optional

from .models import (
    APPLIED,
    INTERVIEW,
    OFFER,
    REJECTED,
    Directive,
    Intent,
    ParsedCommand,
)
from .text_utils import is_close_match, normalize

# checked in order, first hit wins ("red" is a substring check, so keep Rejected last)
STATUS_RULES = [
    (APPLIED, ("applied", "basvur")),
    (INTERVIEW, ("interview", "mulakat")),
    (OFFER, ("offer", "teklif")),
    (REJECTED, ("rejected", "red")),
]

TODAY_WORDS = ["today", "bugun", "bugün", "gunluk", "günlük"]
WEEKLY_WORDS = ["weekly", "weekly plan", "week plan", "haftalik plan", "haftalık plan"]

FALLBACK_RULES = [
    (Intent.TODAY, ("today", "bugun")),
    (Intent.WEEKLY_PLAN, ("week", "weekly", "hafta")),
    (Intent.MOVE, ("move", "tasi", "tas")),
]

# move Google to Interview
MOVE_RE = re.compile(r"^move\s+(.+?)\s+(?:to|into)\s+(applied|interview|offer|rejected)\s*$", re.I)
# Google -> Offer
MOVE_ARROW_RE = re.compile(r"^(.+?)\s*(?:->|→)\s*(applied|interview|offer|rejected)\s*$", re.I)
# google mulakata tasi / google interview'a tasi
MOVE_TR_RE = re.compile(
    r"^(.+?)\s+(mulakat|mülakat|interview|teklif|offer|red|rejected|basvur|başvur)"
    r"'?(?:a|e)?\s*(?:tasi|tas?i|gecir|al)\s*$",
    re.I,
)
FOLLOWUP_RE = re.compile(r"^follow\s*up|^followup", re.I)
FOLLOWUP_WORD_RE = re.compile(r"follow\s*up|followup", re.I)
ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")
NOTE_RE = re.compile(r"^(?:note|not)\s+", re.I)


def resolve_status(text: str) -> Optional[str]:
    x = normalize(text)
    for label, keywords in STATUS_RULES:
        if any(k in x for k in keywords):
            return label
    return None


def _match_today(message: str) -> bool:
    return any(message == normalize(w) or is_close_match(message, w) for w in TODAY_WORDS)


def _match_weekly(message: str) -> bool:
    return any(normalize(w) in message or is_close_match(message, w) for w in WEEKLY_WORDS)


def _match_move(raw: str) -> Optional[ParsedCommand]:
    for pattern in (MOVE_RE, MOVE_ARROW_RE, MOVE_TR_RE):
        m = pattern.search(raw)
        if m:
            company = m.group(1).strip()
            to = resolve_status(m.group(2))
            return ParsedCommand(
                intent=Intent.MOVE,
                company=company,
                to=to,
                actions=[Directive(type=Intent.MOVE.value, company=company, to=to)],
            )
    return None


def _match_followup(raw: str) -> Optional[ParsedCommand]:
    if not FOLLOWUP_RE.search(raw):
        return None
    m = ISO_DATE_RE.search(raw)
    date = m.group(0) if m else None
    rest = raw.replace(date, "", 1) if date else raw
    company = FOLLOWUP_WORD_RE.sub("", rest, count=1).strip()
    return ParsedCommand(
        intent=Intent.FOLLOWUP,
        company=company or None,
        date=date,
        actions=[Directive(type=Intent.FOLLOWUP.value, company=company, date=date)],
    )


def _match_note(raw: str) -> Optional[ParsedCommand]:
    if not NOTE_RE.search(raw):
        return None
    after = NOTE_RE.sub("", raw, count=1).strip()
    head, colon, tail = after.partition(":")
    if colon:
        company = head.strip()
        text = tail.strip()
    else:
        parts = after.split()
        company = parts[0] if parts else ""
        text = after.replace(company, "", 1).strip()
    return ParsedCommand(
        intent=Intent.NOTE,
        company=company or None,
        text=text or None,
        actions=[Directive(type=Intent.NOTE.value, company=company, text=text)],
    )


def _match_fallback(message: str) -> Optional[ParsedCommand]:
    for intent, keywords in FALLBACK_RULES:
        if any(k in message for k in keywords):
            return ParsedCommand(intent=intent)
    return None


def classify_intent(raw_input: Any) -> ParsedCommand:
    """Map a short board command to an intent and its directive.

    Recognizers run in a fixed order and the first match wins:
    today, weekly plan, move, follow-up, note, then loose keyword
    containment. Anything else is UNKNOWN. Never raises.
    """
    raw = "" if raw_input is None else str(raw_input).strip()
    message = normalize(raw)
    if not message:
        return ParsedCommand(intent=Intent.UNKNOWN)

    if _match_today(message):
        return ParsedCommand(intent=Intent.TODAY)
    if _match_weekly(message):
        return ParsedCommand(intent=Intent.WEEKLY_PLAN)

    for recognizer in (_match_move, _match_followup, _match_note):
        parsed = recognizer(raw)
        if parsed is not None:
            return parsed

    return _match_fallback(message) or ParsedCommand(intent=Intent.UNKNOWN)
