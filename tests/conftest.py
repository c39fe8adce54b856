import json

import httpx
import pytest

from agent_media.video.runpod_client import RunpodVideoClient


class FakeRunpod:
    """Scripted Runpod endpoint: one submit response, then queued status responses."""

    def __init__(self, submit=None, statuses=()):
        self.submit_response = submit or httpx.Response(200, json={"id": "job-1", "status": "IN_QUEUE"})
        self.statuses = list(statuses)
        self.requests: list[httpx.Request] = []

    @property
    def submitted(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == "POST"]

    @property
    def polled(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == "GET"]

    def submitted_body(self, index: int = 0) -> dict:
        return json.loads(self.submitted[index].content)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "POST":
            return self.submit_response
        if not self.statuses:
            raise AssertionError(f"Unexpected status request: {request.url}")
        return self.statuses.pop(0)


class RecordingSleep:
    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def status(value, job_id="job-1", **extra) -> httpx.Response:
    return httpx.Response(200, json={"id": job_id, "status": value, **extra})


@pytest.fixture
def sleep():
    return RecordingSleep()


@pytest.fixture
def make_client(sleep):
    def _make(fake: FakeRunpod, **kwargs) -> RunpodVideoClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(fake.handler))
        kwargs.setdefault("sleep", sleep)
        return RunpodVideoClient("test-key", http_client=http_client, **kwargs)

    return _make
