"""
Card stack tests.
Index advancement, replenishment and the accept path into the collection.
"""
import pytest

from swipelines.model.gesture import GestureTracker, SwipeResolver
from swipelines.model.item import Direction, Item


def bind_trackers(stack, scheduler, items):
    """Wire one real tracker per item, the way the swipe view does."""
    trackers = []
    for index, item in enumerate(items):
        resolver = SwipeResolver(scheduler, on_swipe=lambda d, it=item: stack.swiped(d, it))
        tracker = GestureTracker(resolver, excluded=(Direction.UP, Direction.DOWN))
        stack.bind_handle(index, tracker)
        trackers.append(tracker)
    return trackers


@pytest.fixture
def loaded(stack, loader, scheduler, make_items):
    items = make_items(15)
    stack.batch_loaded.connect(lambda batch: bind_trackers(stack, scheduler, batch))
    stack.start()
    loader.complete(items)
    return items


class TestLoading:

    def test_start_issues_single_fetch(self, stack, loader):
        assert stack.start() is True
        assert stack.loading is True
        assert len(loader.calls) == 1
        assert loader.calls[0][0] == 15

        assert stack.check_exhausted() is False
        assert len(loader.calls) == 1

    def test_batch_sets_top_card_active(self, stack, loader, make_items):
        indices = []
        stack.active_index_changed.connect(indices.append)
        stack.start()
        loader.complete(make_items(15))

        assert stack.loading is False
        assert stack.active_index == 14
        assert indices == [14]
        assert stack.active_item.id == "id-14"

    def test_failure_keeps_stack_exhausted(self, stack, loader, notices):
        failures = []
        stack.load_failed.connect(failures.append)
        stack.start()
        loader.fail("timeout")

        assert stack.loading is False
        assert stack.exhausted
        assert stack.pending == []
        assert failures == ["timeout"]
        assert notices.message == "Failed to load lines"
        # No automatic retry
        assert len(loader.calls) == 1

    def test_reload_after_failure(self, stack, loader):
        stack.start()
        loader.fail()
        assert stack.reload() is True
        assert len(loader.calls) == 2

    def test_failure_does_not_touch_existing_cards(self, loaded, stack, loader):
        stack.force_swipe(Direction.LEFT)
        pending = list(stack.pending)
        # A stray failure callback must not corrupt a populated stack
        loader.fail()
        assert stack.pending == pending
        assert stack.active_index == 13

    def test_late_batch_ignored_when_populated(self, loaded, stack, loader, make_items):
        loader.complete(make_items(15, prefix="late"))
        assert stack.active_index == 14
        assert stack.active_item.id == "id-14"


class TestSwipes:

    def test_accept_top_card(self, loaded, stack, collection, notices):
        # 15 items fetched, swipe right on item[14]
        stack.force_swipe(Direction.RIGHT)
        assert len(collection) == 1
        assert collection.items[0].id == "id-14"
        assert stack.active_index == 13
        assert notices.message == "Saved! Rizz secured"

    def test_drag_commit_advances_once(self, loaded, stack, collection):
        tracker = stack._handles[14]
        tracker.begin(0, 0)
        tracker.update(160, 10)
        assert tracker.end() == Direction.RIGHT

        assert stack.active_index == 13
        assert [item.id for item in collection] == ["id-14"]

    def test_cancelled_drag_keeps_index(self, loaded, stack, collection):
        tracker = stack._handles[14]
        tracker.begin(0, 0)
        tracker.update(60, 0)
        tracker.end()
        assert stack.active_index == 14
        assert len(collection) == 0

    def test_reject_all_triggers_refetch(self, loaded, stack, loader, collection):
        for _ in range(15):
            assert stack.force_swipe(Direction.LEFT) is True

        assert stack.active_index == -1
        assert len(collection) == 0
        assert stack.loading is True
        assert len(loader.calls) == 2

    def test_exhaustion_fetches_exactly_once(self, stack, loader, scheduler, make_items):
        stack.batch_loaded.connect(lambda batch: bind_trackers(stack, scheduler, batch))
        stack.start()
        loader.complete(make_items(1))

        stack.force_swipe(Direction.LEFT)
        assert len(loader.calls) == 2
        assert stack.check_exhausted() is False
        assert stack.force_swipe(Direction.LEFT) is False
        assert len(loader.calls) == 2

    def test_force_swipe_with_excluded_direction(self, stack, loader, make_items):
        stack.start()
        items = make_items(2)
        loader.complete(items)
        resolver = SwipeResolver(
            scheduler=_NullScheduler(), on_swipe=lambda d: stack.swiped(d, items[1])
        )
        stack.bind_handle(1, GestureTracker(resolver, excluded=(Direction.RIGHT,)))

        assert stack.force_swipe(Direction.RIGHT) is True
        assert stack.active_index == 0

    def test_duplicate_accept_is_deduplicated(self, stack, loader, scheduler, collection):
        stack.batch_loaded.connect(lambda batch: bind_trackers(stack, scheduler, batch))
        same = Item(id="dup", text="again", category="Test")

        stack.start()
        loader.complete([same])
        stack.force_swipe(Direction.RIGHT)
        loader.complete([same])
        stack.force_swipe(Direction.RIGHT)

        assert [item.id for item in collection] == ["dup"]

    def test_force_swipe_without_active_card(self, stack):
        assert stack.force_swipe(Direction.RIGHT) is False

    def test_force_swipe_without_handle(self, stack, loader, make_items):
        stack.start()
        loader.complete(make_items(3))
        assert stack.force_swipe(Direction.RIGHT) is False
        assert stack.active_index == 2

    def test_released_handle_is_not_used(self, loaded, stack):
        stack.release_handle(14)
        assert stack.force_swipe(Direction.LEFT) is False

    def test_swipe_while_exhausted_is_ignored(self, stack, collection):
        stack.swiped(Direction.RIGHT, Item(id="x", text="x"))
        assert stack.active_index == -1
        assert len(collection) == 0


class _NullScheduler:
    def call_later(self, delay_ms, callback):
        return self

    def cancel(self):
        pass
