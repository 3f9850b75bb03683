from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Optional

APPLIED = "Applied"
INTERVIEW = "Interview"
OFFER = "Offer"
REJECTED = "Rejected"

STATUSES = (APPLIED, INTERVIEW, OFFER, REJECTED)


class Intent(str, Enum):
    TODAY = "TODAY"
    WEEKLY_PLAN = "WEEKLY_PLAN"
    MOVE = "MOVE"
    FOLLOWUP = "FOLLOWUP"
    NOTE = "NOTE"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class Directive:
    type: str                   # MOVE | FOLLOWUP | NOTE
    company: Optional[str] = None
    to: Optional[str] = None
    date: Optional[str] = None  # YYYY-MM-DD
    text: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": self.type, "company": self.company}
        if self.type == Intent.MOVE.value:
            out["to"] = self.to
        elif self.type == Intent.FOLLOWUP.value and self.date is not None:
            out["date"] = self.date
        elif self.type == Intent.NOTE.value and self.text is not None:
            out["text"] = self.text
        return out


@dataclass(frozen=True)
class ParsedCommand:
    intent: Intent
    actions: List[Directive] = field(default_factory=list)
    company: Optional[str] = None
    to: Optional[str] = None
    date: Optional[str] = None
    text: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "intent": self.intent.value,
            "actions": [a.to_dict() for a in self.actions],
        }
        if self.intent == Intent.MOVE and self.actions:
            # a matched MOVE always reports its target, even when unresolved
            out["company"] = self.company
            out["to"] = self.to
            return out
        for key in ("company", "date", "text"):
            value = getattr(self, key)
            if value:
                out[key] = value
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParsedCommand":
        raw_intent = str(data.get("intent") or "UNKNOWN").upper().strip()
        try:
            intent = Intent(raw_intent)
        except ValueError:
            intent = Intent.UNKNOWN
        actions = [
            Directive(
                type=str(a.get("type", "")).upper(),
                company=a.get("company"),
                to=a.get("to"),
                date=a.get("date"),
                text=a.get("text"),
            )
            for a in data.get("actions") or []
            if isinstance(a, dict)
        ]
        return cls(
            intent=intent,
            actions=actions,
            company=data.get("company"),
            to=data.get("to"),
            date=data.get("date"),
            text=data.get("text"),
        )


@dataclass
class Job:
    id: str
    company: str
    role: str = ""
    status: str = APPLIED       # Applied | Interview | Offer | Rejected
    location: str = ""
    link: str = ""
    notes: str = ""
    created_at: int = 0         # epoch ms
    updated_at: int = 0         # epoch ms
    follow_up_at: Optional[str] = None  # YYYY-MM-DD

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Job":
        known = {k: data[k] for k in cls.__dataclass_fields__ if k in data}
        return cls(**known)
