import os

from job_tracker.settings import DEFAULT_PORT, ROOT_DIR, load_settings


def test_load_settings_from_yaml(tmp_path, monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.delenv("JOB_TRACKER_BOARD", raising=False)
    monkeypatch.delenv("AGENT_SERVER_URL", raising=False)
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(
        "app:\n  timezone: Europe/Istanbul\n"
        "server:\n  port: 6000\n"
        "board:\n  path: /tmp/board.json\n"
        "agent:\n",
        encoding="utf-8",
    )
    cfg = load_settings(str(cfg_file))
    assert cfg.timezone == "Europe/Istanbul"
    assert cfg.port == 6000
    assert cfg.board_path == "/tmp/board.json"
    assert cfg.agent == {}
    assert cfg.agent_url == "http://localhost:6000"


def test_env_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("PORT", "7001")
    monkeypatch.setenv("JOB_TRACKER_BOARD", str(tmp_path / "b.json"))
    monkeypatch.setenv("AGENT_SERVER_URL", " http://agent.local:9000/ ")
    cfg = load_settings(str(tmp_path / "missing.yaml"))
    assert cfg.port == 7001
    assert cfg.board_path == str(tmp_path / "b.json")
    assert cfg.agent_url == "http://agent.local:9000"


def test_missing_config_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    cfg = load_settings(str(tmp_path / "missing.yaml"))
    assert cfg.port == DEFAULT_PORT
    assert cfg.timezone == "UTC"


def test_relative_board_path_is_anchored_at_repo_root(tmp_path, monkeypatch):
    monkeypatch.delenv("JOB_TRACKER_BOARD", raising=False)
    monkeypatch.chdir(tmp_path)
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text("board:\n  path: data/board.json\n", encoding="utf-8")
    cfg = load_settings(str(cfg_file))
    assert os.path.normpath(cfg.board_path) == os.path.normpath(os.path.join(ROOT_DIR, "data", "board.json"))
