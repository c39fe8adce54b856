import pytest

from agent_media.video.errors import ProtocolViolation
from agent_media.video.models import JobStatus, RemoteJob, parse_status


def test_from_submission_reads_id():
    job = RemoteJob.from_submission({"id": "abc", "status": "IN_PROGRESS"})

    assert job.id == "abc"
    assert job.status is JobStatus.IN_QUEUE


@pytest.mark.parametrize("submit_status", ["COMPLETED", "FAILED"])
def test_terminal_submit_status_is_not_recorded(submit_status):
    job = RemoteJob.from_submission({"id": "abc", "status": submit_status})

    assert job.status is JobStatus.IN_QUEUE
    assert job.apply_status({"id": "abc", "status": "COMPLETED"}) is JobStatus.COMPLETED


def test_from_submission_defaults_to_queued():
    assert RemoteJob.from_submission({"id": 42}).status is JobStatus.IN_QUEUE
    assert RemoteJob.from_submission({"id": 42}).id == "42"


def test_terminal_states():
    assert JobStatus.COMPLETED.is_terminal
    assert JobStatus.FAILED.is_terminal
    assert not JobStatus.IN_QUEUE.is_terminal
    assert not JobStatus.IN_PROGRESS.is_terminal


def test_parse_status():
    assert parse_status("COMPLETED") is JobStatus.COMPLETED
    assert parse_status("completed") is None
    assert parse_status(" FAILED ") is None
    assert parse_status("nope") is None
    assert parse_status(None) is None


def test_apply_status_records_output_and_error():
    job = RemoteJob(id="abc")
    job.apply_status({"id": "abc", "status": "COMPLETED", "output": {"result": "https://x/y.mp4"}})
    assert job.output_url == "https://x/y.mp4"

    failed = RemoteJob(id="def")
    failed.apply_status({"status": "FAILED", "error": "bad prompt"})
    assert failed.status is JobStatus.FAILED
    assert failed.error == "bad prompt"


@pytest.mark.parametrize("terminal", ["COMPLETED", "FAILED"])
def test_terminal_job_rejects_further_updates(terminal):
    job = RemoteJob(id="abc")
    job.apply_status({"id": "abc", "status": terminal})

    with pytest.raises(ProtocolViolation):
        job.apply_status({"id": "abc", "status": "IN_QUEUE"})

    assert job.status is JobStatus(terminal)


def test_foreign_job_id_is_rejected():
    job = RemoteJob(id="abc")

    with pytest.raises(ProtocolViolation):
        job.apply_status({"id": "xyz", "status": "IN_PROGRESS"})

    assert job.status is JobStatus.IN_QUEUE
