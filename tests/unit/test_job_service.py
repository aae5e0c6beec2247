"""
Unit tests for JobService against the in-memory repository.
"""

import pytest
from bson import ObjectId
from unittest.mock import MagicMock

from src.common.error_handling import JobNotFoundError, JobValidationError
from src.common.repositories import WriteResult
from src.services.job_service import JobService


@pytest.fixture
def service(memory_repo):
    return JobService(memory_repo)


class TestListJobs:
    def test_most_recent_first(self, service):
        jobs = service.list_jobs()

        assert [job["dateApplied"][:10] for job in jobs] == [
            "2024-03-05", "2024-02-28", "2024-02-10", "2024-01-20",
        ]

    def test_empty_collection(self, empty_repo):
        assert JobService(empty_repo).list_jobs() == []


class TestCreateJob:
    def test_returns_string_id_and_timestamps(self, service):
        job = service.create_job({"company": "Acme", "role": "Engineer"})

        assert isinstance(job["_id"], str)
        assert job["status"] == "Applied"
        assert job["createdAt"] == job["updatedAt"]

    def test_persists_document(self, service, memory_repo):
        job = service.create_job({"company": "Acme", "role": "Engineer", "dateApplied": "2025-01-01"})

        stored = memory_repo.find_one({"_id": ObjectId(job["_id"])})
        assert stored["company"] == "Acme"
        assert stored["dateApplied"].year == 2025

    def test_invalid_payload_not_persisted(self, service, memory_repo):
        with pytest.raises(JobValidationError):
            service.create_job({"company": "Acme"})

        assert len(memory_repo.documents) == 4


class TestGetJob:
    def test_found(self, service):
        job_id = service.list_jobs()[0]["_id"]

        assert service.get_job(job_id)["_id"] == job_id

    @pytest.mark.parametrize("job_id", [str(ObjectId()), "bogus", ""])
    def test_not_found(self, service, job_id):
        with pytest.raises(JobNotFoundError):
            service.get_job(job_id)


class TestUpdateJob:
    def test_status_only_patch(self, service):
        before = service.list_jobs()[-1]

        after = service.update_job(before["_id"], {"status": "Interviewing"})

        assert after["status"] == "Interviewing"
        assert after["company"] == before["company"]
        assert after["role"] == before["role"]
        assert after["dateApplied"] == before["dateApplied"]
        assert "updatedAt" in after

    def test_not_found(self, service):
        with pytest.raises(JobNotFoundError):
            service.update_job(str(ObjectId()), {"status": "Rejected"})

    def test_validation_error_leaves_document(self, service, memory_repo):
        job = service.list_jobs()[0]

        with pytest.raises(JobValidationError):
            service.update_job(job["_id"], {"status": "Hired"})

        assert memory_repo.find_one({"_id": ObjectId(job["_id"])})["status"] == job["status"]

    def test_deleted_between_read_and_write(self):
        oid = ObjectId()
        repo = MagicMock()
        repo.find_one.return_value = {
            "_id": oid, "company": "Acme", "role": "Engineer",
            "dateApplied": "2024-01-01", "status": "Applied",
        }
        repo.update_one.return_value = WriteResult(matched_count=0, modified_count=0)

        with pytest.raises(JobNotFoundError):
            JobService(repo).update_job(str(oid), {"status": "Rejected"})

    def test_writes_only_changed_fields(self):
        oid = ObjectId()
        repo = MagicMock()
        repo.find_one.return_value = {
            "_id": oid, "company": "Acme", "role": "Engineer",
            "dateApplied": "2024-01-01", "status": "Applied",
        }
        repo.update_one.return_value = WriteResult(matched_count=1, modified_count=1)

        JobService(repo).update_job(str(oid), {"status": "Rejected", "company": "Acme"})

        filter, update = repo.update_one.call_args[0]
        assert filter == {"_id": oid}
        assert set(update["$set"]) == {"status", "company", "updatedAt"}


class TestDeleteJob:
    def test_deletes(self, service, memory_repo):
        job_id = service.list_jobs()[0]["_id"]

        service.delete_job(job_id)

        assert len(memory_repo.documents) == 3
        with pytest.raises(JobNotFoundError):
            service.get_job(job_id)

    def test_not_found(self, service):
        with pytest.raises(JobNotFoundError):
            service.delete_job(str(ObjectId()))

    def test_malformed_id_never_reaches_store(self):
        repo = MagicMock()

        with pytest.raises(JobNotFoundError):
            JobService(repo).delete_job("bogus")

        repo.delete_one.assert_not_called()
