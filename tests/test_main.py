import json
from unittest.mock import patch

import pytest

from job_tracker import main as cli
from job_tracker.board import BoardStore
from job_tracker.client import AgentError
from job_tracker.models import ParsedCommand


@pytest.fixture
def board_path(monkeypatch, tmp_path):
    monkeypatch.setattr("job_tracker.settings.CONFIG_PATH", str(tmp_path / "missing.yaml"))
    path = tmp_path / "board.json"
    monkeypatch.setenv("JOB_TRACKER_BOARD", str(path))
    BoardStore(str(path)).add("Acme Corp", id="acme")
    return path


def test_parse_prints_json(capsys):
    assert cli.main(["parse", "Acme", "->", "Offer"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["intent"] == "MOVE"
    assert out["to"] == "Offer"


def test_run_applies_to_board(board_path, capsys):
    assert cli.main(["run", "move", "acme", "to", "Interview"]) == 0
    assert "[AGENT] MOVE | Move executed" in capsys.readouterr().out
    assert BoardStore(str(board_path)).get()[0].status == "Interview"


def test_run_dry_run_leaves_board(board_path, capsys):
    assert cli.main(["run", "--dry-run", "move", "acme", "to", "Offer"]) == 0
    assert "[DRY-RUN] MOVE | Read-only view" in capsys.readouterr().out
    assert BoardStore(str(board_path)).get()[0].status == "Applied"


def test_run_remote(board_path, capsys):
    parsed = ParsedCommand.from_dict({
        "intent": "NOTE",
        "company": "Acme",
        "text": "recruiter asked for portfolio",
        "actions": [{"type": "NOTE", "company": "Acme", "text": "recruiter asked for portfolio"}],
    })
    with patch.object(cli, "get_intent", return_value=parsed) as fake:
        assert cli.main(["run", "--remote", "note Acme: recruiter asked for portfolio"]) == 0
    fake.assert_called_once()
    assert BoardStore(str(board_path)).get()[0].notes == "recruiter asked for portfolio"


def test_run_remote_transport_failure(board_path, capsys):
    with patch.object(cli, "get_intent", side_effect=AgentError("Agent server error (503)")):
        assert cli.main(["run", "--remote", "today"]) == 1
    assert "[ERROR] Agent server error (503)" in capsys.readouterr().err


def test_run_arrow_syntax(board_path, capsys):
    assert cli.main(["run", "Acme", "->", "Offer"]) == 0
    assert "[AGENT] MOVE | Move executed" in capsys.readouterr().out
    assert BoardStore(str(board_path)).get()[0].status == "Offer"


def test_command_text_is_required(board_path):
    with pytest.raises(SystemExit):
        cli.main(["run"])
