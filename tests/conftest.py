"""
Pytest configuration.
Runs Qt headless and provides in-memory stand-ins for the timer loop,
storage and the content source.
"""
import os

# Must be set before the first QApplication is created
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtWidgets import QApplication

from swipelines.controller.notices import NoticeChannel
from swipelines.model.collection import SavedCollection
from swipelines.model.item import Item
from swipelines.model.stack import CardStack


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


class ManualTask:
    def __init__(self, due_ms, callback):
        self.due_ms = due_ms
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """Scheduler driven by advance() instead of wall-clock time."""

    def __init__(self):
        self.now_ms = 0
        self.tasks = []

    def call_later(self, delay_ms, callback):
        task = ManualTask(self.now_ms + delay_ms, callback)
        self.tasks.append(task)
        return task

    @property
    def pending(self):
        return [t for t in self.tasks if not t.cancelled]

    def advance(self, ms):
        target = self.now_ms + ms
        while True:
            due = [t for t in self.pending if t.due_ms <= target]
            if not due:
                break
            task = min(due, key=lambda t: t.due_ms)
            self.tasks.remove(task)
            self.now_ms = task.due_ms
            task.callback()
        self.now_ms = target


class MemoryStorage:
    def __init__(self, initial=None):
        self.data = dict(initial or {})
        self.writes = 0

    def read(self, key):
        return self.data.get(key)

    def write(self, key, value):
        self.writes += 1
        self.data[key] = value


class FakeLoader:
    """Records load() calls; the test decides when and how they finish."""

    def __init__(self):
        self.calls = []

    def load(self, size, on_success, on_failure):
        self.calls.append((size, on_success, on_failure))

    def complete(self, items):
        _, on_success, _ = self.calls[-1]
        on_success(list(items))

    def fail(self, message="boom"):
        _, _, on_failure = self.calls[-1]
        on_failure(message)


@pytest.fixture
def make_items():
    def _make(n, prefix="id"):
        return [Item(id=f"{prefix}-{i}", text=f"line {i}", category="Test") for i in range(n)]
    return _make


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def loader():
    return FakeLoader()


@pytest.fixture
def notices(scheduler):
    return NoticeChannel(scheduler)


@pytest.fixture
def collection(storage):
    return SavedCollection(storage)


@pytest.fixture
def stack(collection, loader, notices):
    return CardStack(collection, loader, notices, batch_size=15)
