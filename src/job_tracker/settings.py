import os
import yaml
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from dotenv import load_dotenv

load_dotenv()

ROOT_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "..")

CONFIG_PATH = os.environ.get("JOB_TRACKER_CONFIG", os.path.join(ROOT_DIR, "config.yaml"))

DEFAULT_PORT = 5174
DEFAULT_BOARD_PATH = os.path.join(ROOT_DIR, "data", "board.json")


@dataclass
class Settings:
    app: Dict[str, Any] = field(default_factory=dict)
    server: Dict[str, Any] = field(default_factory=dict)
    board: Dict[str, Any] = field(default_factory=dict)
    agent: Dict[str, Any] = field(default_factory=dict)

    @property
    def port(self) -> int:
        return int(os.environ.get("PORT") or self.server.get("port", DEFAULT_PORT))

    @property
    def host(self) -> str:
        return self.server.get("host", "127.0.0.1")

    @property
    def board_path(self) -> str:
        env_path = os.environ.get("JOB_TRACKER_BOARD")
        if env_path:
            return env_path
        path = self.board.get("path")
        if not path:
            return DEFAULT_BOARD_PATH
        # relative paths in config.yaml are anchored at the repo root
        return path if os.path.isabs(path) else os.path.join(ROOT_DIR, path)

    @property
    def agent_url(self) -> str:
        url = os.environ.get("AGENT_SERVER_URL") or self.agent.get("base_url") or ""
        return url.strip().rstrip("/") or f"http://localhost:{self.port}"

    @property
    def timezone(self) -> str:
        return self.app.get("timezone", "UTC")


def load_settings(path: Optional[str] = None) -> Settings:
    path = path or CONFIG_PATH
    cfg: Dict[str, Any] = {}
    if os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    # unknown blocks are ignored, missing ones stay empty
    blocks = {k: cfg.get(k) or {} for k in ("app", "server", "board", "agent")}
    return Settings(**blocks)
