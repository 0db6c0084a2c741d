from settingsform.stores import MemoryOptionStore


def test_get_returns_default_when_missing():
    store = MemoryOptionStore()

    assert store.get("missing") is None
    assert store.get("missing", {}) == {}


def test_set_and_get_copy_values():
    store = MemoryOptionStore()
    value = {"demo_general_name": "Bob"}

    store.set("demo_settings", value)
    value["demo_general_name"] = "changed"
    fetched = store.get("demo_settings")
    fetched["demo_general_name"] = "changed again"

    assert store.get("demo_settings") == {"demo_general_name": "Bob"}


def test_delete():
    store = MemoryOptionStore({"a": None})

    assert store.delete("a") is True
    assert store.delete("a") is False
