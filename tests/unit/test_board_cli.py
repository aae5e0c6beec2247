"""Tests for the terminal board commands."""

import pytest
from unittest.mock import MagicMock

from src.board.cli import build_parser, run
from src.board.client import TrackerApiError, TrackerClient


CARDS = [
    {"_id": "a1", "company": "PayFlow", "role": "Architect",
     "dateApplied": "2024-03-05T00:00:00", "status": "Interviewing"},
    {"_id": "b2", "company": "StreamCo", "role": "Backend Engineer",
     "dateApplied": "2024-02-10T00:00:00", "status": "Applied"},
]


@pytest.fixture
def api():
    api = MagicMock(spec=TrackerClient)
    api.list_jobs.return_value = [dict(card) for card in CARDS]
    return api


def _run(api, *argv):
    return run(build_parser().parse_args(list(argv)), client=api)


def test_list_prints_every_column(api, capsys):
    assert _run(api, "list") == 0

    out = capsys.readouterr().out
    for heading in ("Applied (1)", "Interviewing (1)", "Offer Received (0)", "Rejected (0)"):
        assert heading in out
    assert "PayFlow" in out
    assert "2024-03-05" in out


def test_unreachable_api_exits_nonzero(api, capsys):
    api.list_jobs.side_effect = TrackerApiError("Cannot connect to tracker API at http://x")

    assert _run(api, "list") == 1
    assert "Cannot connect" in capsys.readouterr().err


def test_show_fetches_fresh_card(api, capsys):
    api.get_job.return_value = {**CARDS[0], "status": "Offer Received"}

    assert _run(api, "show", "a1") == 0

    api.get_job.assert_called_once_with("a1")
    out = capsys.readouterr().out
    assert "PayFlow" in out
    assert "Offer Received" in out
    assert "2024-03-05" in out


def test_show_missing_job(api, capsys):
    api.get_job.side_effect = TrackerApiError("Job not found", status_code=404)

    assert _run(api, "show", "zz9") == 1
    assert "no longer exists" in capsys.readouterr().err


def test_add(api):
    api.create_job.return_value = {"_id": "n1", "company": "Acme", "role": "Dev",
                                   "dateApplied": "2024-05-01T00:00:00", "status": "Applied"}

    assert _run(api, "add", "--company", "Acme", "--role", "Dev", "--date", "2024-05-01") == 0

    api.create_job.assert_called_once_with(
        {"company": "Acme", "role": "Dev", "dateApplied": "2024-05-01", "status": "Applied"}
    )


def test_edit_keeps_unspecified_fields(api):
    api.update_job.return_value = {**CARDS[0], "role": "Principal"}

    assert _run(api, "edit", "a1", "--role", "Principal") == 0

    payload = api.update_job.call_args[0][1]
    assert payload["role"] == "Principal"
    assert payload["company"] == "PayFlow"
    assert payload["status"] == "Interviewing"


def test_edit_unknown_job(api, capsys):
    assert _run(api, "edit", "zz9", "--role", "Principal") == 1
    assert "Job not found" in capsys.readouterr().err


def test_move_onto_card(api):
    api.update_job.return_value = {**CARDS[1], "status": "Interviewing"}

    assert _run(api, "move", "b2", "a1") == 0

    api.update_job.assert_called_once_with("b2", {"status": "Interviewing"})


def test_move_to_same_column_succeeds_without_request(api):
    assert _run(api, "move", "b2", "Applied") == 0
    api.update_job.assert_not_called()


def test_move_to_unknown_target(api):
    assert _run(api, "move", "b2", "Ghosted") == 1
    api.update_job.assert_not_called()


def test_move_failure(api, capsys):
    api.update_job.side_effect = TrackerApiError("Request timed out: PUT /jobs/b2")

    assert _run(api, "move", "b2", "Rejected") == 1
    assert "Failed to update status" in capsys.readouterr().err


def test_delete_with_yes(api):
    assert _run(api, "delete", "b2", "--yes") == 0
    api.delete_job.assert_called_once_with("b2")


def test_delete_declined(api, monkeypatch):
    monkeypatch.setattr("builtins.input", lambda prompt: "n")

    assert _run(api, "delete", "b2") == 1
    api.delete_job.assert_not_called()
