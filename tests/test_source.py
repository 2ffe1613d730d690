"""
Content source tests. The HTTP session is mocked.
"""
import itertools
from unittest.mock import MagicMock

import pytest
import requests

from swipelines.controller import source as source_module
from swipelines.controller.source import MAX_FETCH_WORKERS, BatchFetchError, BatchSource


def response(payload=None, error=None):
    resp = MagicMock()
    if error is not None:
        resp.raise_for_status.side_effect = error
    resp.json.return_value = payload
    return resp


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


def test_fetch_batch_normalizes(session):
    counter = itertools.count()
    session.get.side_effect = lambda *a, **kw: response({"_id": f"id-{next(counter)}", "text": "hello"})

    source = BatchSource(url="http://example.test/random", timeout=3.0, session=session)
    items = source.fetch_batch(15)

    assert len(items) == 15
    assert len({item.id for item in items}) == 15
    assert all(item.category == "Pickup Line" for item in items)
    assert session.get.call_count == 15
    session.get.assert_called_with("http://example.test/random", timeout=3.0)


def test_one_failure_aborts_batch(session):
    counter = itertools.count()

    def get(*args, **kwargs):
        if next(counter) == 3:
            raise requests.ConnectionError("connection reset")
        return response({"text": "fine"})

    session.get.side_effect = get
    with pytest.raises(BatchFetchError):
        BatchSource(session=session).fetch_batch(5)


def test_http_error_status(session):
    session.get.return_value = response(error=requests.HTTPError("503"))
    with pytest.raises(BatchFetchError):
        BatchSource(session=session).fetch_batch(2)


def test_non_json_body(session):
    resp = response()
    resp.json.side_effect = ValueError("not json")
    session.get.return_value = resp
    with pytest.raises(BatchFetchError):
        BatchSource(session=session).fetch_batch(2)


def test_missing_text(session):
    session.get.return_value = response({"_id": "a"})
    with pytest.raises(BatchFetchError, match="Malformed"):
        BatchSource(session=session).fetch_batch(1)


def test_empty_batch(session):
    assert BatchSource(session=session).fetch_batch(0) == []
    session.get.assert_not_called()


def test_worker_threads_are_capped(session, monkeypatch):
    real_executor = source_module.ThreadPoolExecutor
    sizes = []

    def recording_executor(max_workers):
        sizes.append(max_workers)
        return real_executor(max_workers=max_workers)

    monkeypatch.setattr(source_module, "ThreadPoolExecutor", recording_executor)
    session.get.side_effect = lambda *a, **kw: response({"text": "hello"})

    items = BatchSource(url="http://example.test/random", session=session).fetch_batch(200)

    assert len(items) == 200
    assert sizes == [MAX_FETCH_WORKERS]
