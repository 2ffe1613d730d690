import pytest

from swipelines.config import DEFAULT_CATEGORY
from swipelines.model.item import Direction, Item


def test_payload_without_id_and_category():
    first = Item.from_payload({"text": "Are you a magnet?"})
    second = Item.from_payload({"text": "Are you a magnet?"})

    assert first.text == "Are you a magnet?"
    assert first.category == DEFAULT_CATEGORY == "Pickup Line"
    assert first.id
    assert first.id != second.id


def test_payload_fields_are_kept():
    item = Item.from_payload({"_id": "abc", "text": "hi", "category": "Cheesy"})
    assert item == Item(id="abc", text="hi", category="Cheesy")


def test_empty_category_falls_back():
    assert Item.from_payload({"text": "hi", "category": ""}).category == DEFAULT_CATEGORY


def test_falsy_id_is_kept():
    assert Item.from_payload({"_id": 0, "text": "hi"}).id == "0"


def test_empty_id_is_generated():
    assert Item.from_payload({"_id": "", "text": "hi"}).id != ""


@pytest.mark.parametrize("payload", [{"_id": "x"}, {"text": None}, ["text"], "text"])
def test_unusable_payload(payload):
    with pytest.raises(ValueError):
        Item.from_payload(payload)


def test_items_are_immutable():
    item = Item(id="a", text="b")
    with pytest.raises(AttributeError):
        item.text = "c"


def test_direction_signs():
    assert Direction.RIGHT.sign == 1
    assert Direction.LEFT.sign == -1
    assert Direction.UP.sign == -1
    assert not Direction.DOWN.is_horizontal
