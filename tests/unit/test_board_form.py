"""Tests for JobForm."""

import pytest

from src.board.form import JobForm
from src.common.job_model import today_utc


def test_new_form_defaults():
    form = JobForm.for_new()

    assert form.company == ""
    assert form.role == ""
    assert form.status == "Applied"
    assert form.date_applied == today_utc().isoformat()
    assert not form.is_editing


def test_edit_form_prepopulated():
    form = JobForm.for_edit({
        "_id": "a1", "company": "Acme", "role": "Dev",
        "dateApplied": "2024-01-15T00:00:00", "status": "Offer Received",
    })

    assert form.is_editing
    assert form.job_id == "a1"
    assert form.date_applied == "2024-01-15"
    assert form.status == "Offer Received"


def test_payload_uses_api_field_names():
    form = JobForm(company="Acme", role="Dev", date_applied="2024-01-15T10:30:00", status="Rejected")

    assert form.to_payload() == {
        "company": "Acme", "role": "Dev", "dateApplied": "2024-01-15", "status": "Rejected",
    }


def test_payload_rejects_unreadable_date():
    with pytest.raises(ValueError):
        JobForm(company="Acme", role="Dev", date_applied="15/01/2024").to_payload()
