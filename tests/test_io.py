import json

from PySide6.QtCore import QSettings

from swipelines.config import STORAGE_KEY
from swipelines.model.io import CollectionIO, SettingsStorage
from swipelines.model.item import Item


def test_decode_absent():
    assert CollectionIO.decode(None) == []
    assert CollectionIO.decode("") == []


def test_decode_missing_fields_is_empty():
    assert CollectionIO.decode(json.dumps([{"id": "a"}])) == []


def test_decode_drops_duplicate_ids():
    raw = json.dumps([
        {"id": "a", "text": "first", "category": "C"},
        {"id": "a", "text": "second", "category": "C"},
    ])
    items = CollectionIO.decode(raw)
    assert [item.text for item in items] == ["first"]


def test_encode_layout():
    raw = CollectionIO.encode([Item(id="a", text="héllo", category="C")])
    assert json.loads(raw) == [{"id": "a", "text": "héllo", "category": "C"}]


def test_export_json(tmp_path):
    path = tmp_path / "saved.json"
    items = [Item(id="b", text="two", category="C"), Item(id="a", text="one", category="C")]
    CollectionIO.export_json(items, str(path))

    data = json.loads(path.read_text(encoding="utf-8"))
    assert [entry["id"] for entry in data] == ["b", "a"]


def test_settings_storage_round_trip(tmp_path):
    path = str(tmp_path / "swipelines.ini")
    items = [
        Item(id="a", text='Are you "wifi"? Because; I feel = a connection,\nright? 😉', category="Pickup Line"),
        Item(id="b", text="key=value, [section]", category="Cheesy"),
    ]
    SettingsStorage(QSettings(path, QSettings.Format.IniFormat)).write(STORAGE_KEY, CollectionIO.encode(items))

    reopened = SettingsStorage(QSettings(path, QSettings.Format.IniFormat))
    assert CollectionIO.decode(reopened.read(STORAGE_KEY)) == items

    reopened.write(STORAGE_KEY, CollectionIO.encode([]))
    cleared = SettingsStorage(QSettings(path, QSettings.Format.IniFormat))
    assert cleared.read(STORAGE_KEY) == "[]"
    assert CollectionIO.decode(cleared.read(STORAGE_KEY)) == []
