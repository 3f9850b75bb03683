from typing import Any, Optional

import requests

from .models import ParsedCommand


class AgentError(Exception):
    """The agent server could not be reached or answered with an error."""


def _error_message(resp: requests.Response, data: Any) -> str:
    if isinstance(data, dict):
        for key in ("message", "error", "detail"):
            msg = data.get(key)
            if isinstance(msg, str) and msg:
                return msg
    return f"Agent server error ({resp.status_code})"


def get_intent(command: str, base_url: str, debug: bool = False,
               session: Optional[requests.Session] = None) -> ParsedCommand:
    url = f"{base_url.rstrip('/')}/api/agent-intent"
    http = session or requests
    try:
        resp = http.post(url, json={"input": command}, params={"debug": 1} if debug else None)
    except requests.RequestException as e:
        raise AgentError(f"Agent request failed: {e}") from e

    try:
        data = resp.json()
    except ValueError:
        data = None

    if not resp.ok:
        raise AgentError(_error_message(resp, data))

    if isinstance(data, str):
        data = {"intent": data}
    if not isinstance(data, dict):
        data = {}
    return ParsedCommand.from_dict(data)
