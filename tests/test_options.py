"""Stored value accessor unit tests"""

from settingsform.options import (
    delete_settings,
    element_id,
    get_setting,
    get_settings,
    option_group_from_source,
    option_name,
)


def test_option_group_from_source_strips_extension_and_symbols():
    assert option_group_from_source("settings/my-plugin_settings.toml") == "mypluginsettings"
    assert option_group_from_source("demo.json") == "demo"
    assert option_group_from_source("/abs/path/Site Options 2.toml") == "SiteOptions2"


def test_element_id_is_deterministic():
    assert element_id("demo", "info", "count") == "demo_info_count"
    assert element_id("demo", "info", "count") == element_id("demo", "info", "count")


def test_option_name():
    assert option_name("demo") == "demo_settings"


def test_get_settings_empty_when_nothing_stored(settings_api):
    assert get_settings(settings_api, "demo") == {}


def test_get_settings_ignores_non_mapping_values(settings_api):
    settings_api.update_option("demo_settings", "corrupt")

    assert get_settings(settings_api, "demo") == {}


def test_get_setting_returns_stored_value(settings_api):
    settings_api.update_option("demo_settings", {"demo_info_count": "42"})

    assert get_setting(settings_api, "demo", "info", "count") == "42"


def test_get_setting_returns_false_when_missing(settings_api):
    settings_api.update_option("demo_settings", {"demo_info_count": "42"})

    assert get_setting(settings_api, "demo", "info", "other") is False
    assert get_setting(settings_api, "empty", "info", "count") is False


def test_delete_settings(settings_api, store):
    settings_api.update_option("demo_settings", {"demo_info_count": "42"})

    delete_settings(settings_api, "demo")

    assert store.get("demo_settings") is None
    assert get_settings(settings_api, "demo") == {}
