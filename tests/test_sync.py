import pytest
import requests

from core.exceptions import SyncError
from core.sync import MESSAGE_NOT_CONFIGURED, SyncController, build_session


class FakeResponse:
    def __init__(self, status_code: int = 200) -> None:
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")


class FakeSession:
    def __init__(self, response=None, error=None) -> None:
        self.response = response or FakeResponse()
        self.error = error
        self.calls = []

    def post(self, url, json, timeout):
        self.calls.append((url, json, timeout))
        if self.error:
            raise self.error
        return self.response


def test_sync_posts_tasks_with_timestamp():
    session = FakeSession()
    controller = SyncController("https://sync.example/tasks", timeout=2.5, session=session)

    count = controller.sync([{"id": "a", "title": "One"}, {"id": "b", "title": "Two"}])

    assert count == 2
    url, payload, timeout = session.calls[0]
    assert url == "https://sync.example/tasks"
    assert timeout == 2.5
    assert [task["id"] for task in payload["tasks"]] == ["a", "b"]
    assert payload["synced_at"]


def test_sync_requires_url():
    controller = SyncController(None)
    assert controller.configured is False
    with pytest.raises(SyncError) as excinfo:
        controller.sync([])
    assert str(excinfo.value) == MESSAGE_NOT_CONFIGURED


def test_sync_wraps_http_errors():
    controller = SyncController("https://sync.example/tasks", session=FakeSession(FakeResponse(503)))
    with pytest.raises(SyncError) as excinfo:
        controller.sync([{"id": "a"}])
    assert str(excinfo.value).startswith("Sync failed:")


def test_sync_wraps_transport_errors():
    session = FakeSession(error=requests.ConnectionError("refused"))
    controller = SyncController("https://sync.example/tasks", session=session)
    with pytest.raises(SyncError):
        controller.sync([])


def test_build_session_mounts_retry_adapters():
    session = build_session()
    adapter = session.get_adapter("https://sync.example")
    assert adapter.max_retries.total == 3
    assert session.headers["Accept"] == "application/json"
