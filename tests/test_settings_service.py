import pytest

from directors_chair.database import ConstraintViolationError


def test_get_missing_setting_is_none(store):
    assert store.settings.get_setting("apiKeys.fal") is None
    assert store.settings.get_json_setting("uiPreferences", default={}) == {}


def test_set_setting_upserts(store):
    store.settings.set_setting("selectedProvider", "wan")
    store.settings.set_setting("selectedProvider", "kling")
    assert store.settings.get_setting("selectedProvider") == "kling"
    assert store.settings.list_settings() == {"selectedProvider": "kling"}


def test_json_settings_round_trip(store):
    keys = {"gemini": "g-123", "fal": "f-456"}
    store.settings.set_json_setting("apiKeys", keys)
    assert store.settings.get_setting("apiKeys") == '{"gemini": "g-123", "fal": "f-456"}'
    assert store.settings.get_json_setting("apiKeys") == keys


def test_non_json_value_falls_back_to_default(store):
    store.settings.set_setting("guidedMode", "yes please")
    assert store.settings.get_json_setting("guidedMode", default=False) is False


def test_delete_setting(store):
    store.settings.set_setting("theme", "dark")
    assert store.settings.delete_setting("theme") is True
    assert store.settings.delete_setting("theme") is False
    assert store.settings.get_setting("theme") is None


@pytest.mark.parametrize("key,value", [("", "x"), ("   ", "x"), ("ok", 42), ("ok", None)])
def test_invalid_settings_rejected(store, key, value):
    with pytest.raises(ConstraintViolationError):
        store.settings.set_setting(key, value)
    assert store.settings.list_settings() == {}
