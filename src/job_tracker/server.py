"""HTTP endpoints for the board agent.

Classification never fails, so ``/api/agent-intent`` always answers 200 with
at worst an UNKNOWN intent.
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .nlp_rules import classify_intent
from .settings import Settings, load_settings
from .text_utils import normalize

logger = logging.getLogger(__name__)


def _command_from(body: Any) -> str:
    if not isinstance(body, dict):
        return ""
    value = body.get("input")
    if value is None:
        value = body.get("message")
    return "" if value is None else str(value)


def create_app(cors_origins: Optional[List[str]] = None) -> FastAPI:
    app = FastAPI(title="Job Tracker Agent", version="1.0.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins or ["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health() -> Dict[str, bool]:
        return {"ok": True}

    @app.post("/api/agent-intent")
    async def agent_intent(request: Request, debug: bool = False) -> Dict[str, Any]:
        try:
            body = await request.json()
        except ValueError:
            body = None
        command = _command_from(body)
        out = classify_intent(command).to_dict()
        logger.debug("agent-intent %r -> %s", command, out["intent"])
        if debug:
            out["debug"] = {"input": command, "normalized": normalize(command)}
        return out

    return app


def run_server(settings: Optional[Settings] = None) -> None:
    import uvicorn

    settings = settings or load_settings()
    app = create_app(settings.server.get("cors_origins"))
    logger.info("Agent server running on http://%s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)
