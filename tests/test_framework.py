"""End-to-end tests for a settings page"""

import re

import pytest

from settingsform.consts import (
    HOOK_AFTER_SETTINGS,
    HOOK_AFTER_TAB_LINKS,
    HOOK_BEFORE_SETTINGS_FIELDS,
    HOOK_BEFORE_TAB_LINKS,
    HOOK_REGISTER_SETTINGS,
    HOOK_VALIDATE,
)
from settingsform.errors import SchemaError
from settingsform.framework import SettingsFramework


def _framework(source, settings_api, hooks, group="demo"):
    framework = SettingsFramework(source, group, settings_api=settings_api, hooks=hooks)
    framework.admin_init()
    return framework


def test_general_section_renders_text_input(general_source, settings_api, hooks):
    framework = _framework(general_source, settings_api, hooks)

    html = framework.settings()

    assert html.count("<h3>") == 1
    assert "<h3>General</h3>" in html
    inputs = re.findall(r'<input type="text"[^>]*>', html)
    assert len(inputs) == 1
    assert 'name="demo_settings[demo_general_name]"' in inputs[0]
    assert 'value="Bob"' in inputs[0]


def test_form_structure(general_source, settings_api, hooks):
    framework = _framework(general_source, settings_api, hooks)
    framework.form_action = "/save"

    html = framework.settings()

    assert '<form action="/save" method="post">' in html
    assert '<input type="hidden" name="option_page" value="demo" />' in html
    assert 'name="_nonce"' in html
    assert '<input type="submit" class="button-primary" value="Save Changes" />' in html
    assert html.index("<form") < html.index("<h3>General</h3>") < html.index("</form>")


def test_stored_value_is_displayed(general_source, settings_api, hooks):
    settings_api.update_option("demo_settings", {"demo_general_name": "Alice"})
    framework = _framework(general_source, settings_api, hooks)

    html = framework.settings()

    assert 'value="Alice"' in html
    assert 'value="Bob"' not in html


def test_option_group_from_file_name(tmp_path, settings_api, hooks):
    source = tmp_path / "my-plugin.toml"
    source.write_text('[[sections]]\nsection_id = "a"\ntitle = "A"\n', encoding="utf-8")

    framework = SettingsFramework(source, settings_api=settings_api, hooks=hooks)

    assert framework.get_option_group() == "myplugin"


def test_explicit_option_group_overrides_file_name(tmp_path, settings_api, hooks):
    source = tmp_path / "my-plugin.toml"
    source.write_text('[[sections]]\nsection_id = "a"\ntitle = "A"\n', encoding="utf-8")

    framework = SettingsFramework(source, "custom", settings_api=settings_api, hooks=hooks)

    assert framework.get_option_group() == "custom"


def test_raw_source_requires_option_group(general_source, settings_api):
    with pytest.raises(SchemaError):
        SettingsFramework(general_source, settings_api=settings_api)


def test_schema_error_prevents_registration(settings_api, hooks):
    with pytest.raises(SchemaError):
        SettingsFramework({"sections": "broken"}, "demo", settings_api=settings_api, hooks=hooks)

    assert settings_api.registered_groups() == []
    assert settings_api.sections("demo") == []


def test_untitled_section_fields_never_registered(settings_api, hooks):
    source = [
        {"section_id": "hidden", "fields": [{"id": "name", "title": "Name"}]},
        {"section_id": "shown", "title": "Shown", "fields": [{"id": "name", "title": "Name"}]},
    ]
    framework = _framework(source, settings_api, hooks)

    assert [s.id for s in settings_api.sections("demo")] == ["shown"]
    assert settings_api.fields("demo", "hidden") == []
    assert "demo_hidden_name" not in framework.settings()


def test_sections_render_in_order(settings_api, hooks):
    source = [
        {"section_id": "A", "title": "A", "order": 2},
        {"section_id": "B", "title": "B", "order": 1},
        {"section_id": "C", "title": "C", "order": 1},
        {"section_id": "D", "title": "D", "order": 3},
    ]
    framework = _framework(source, settings_api, hooks)

    html = framework.settings()

    assert re.findall(r"<h3>(\w)</h3>", html) == ["B", "C", "A", "D"]
    assert [s.section_id for s in framework.sections] == ["B", "C", "A", "D"]


def test_tab_links_rendered_before_form(settings_api, hooks):
    source = {
        "sections": [{"section_id": "general", "title": "General"}],
        "tabs": [{"id": "general", "title": "General"}, {"id": "extra", "title": "Extra"}],
    }
    hooks.add_action(HOOK_BEFORE_TAB_LINKS, lambda group: "<!-- tabs -->")
    hooks.add_action(HOOK_AFTER_TAB_LINKS, lambda group: "<!-- /tabs -->")
    framework = _framework(source, settings_api, hooks)

    html = framework.settings()

    assert '<a class="nav-tab triggerTab nav-tab-active" href="#tab-general">General</a>' in html
    assert '<a class="nav-tab triggerTab" href="#tab-extra">Extra</a>' in html
    assert html.index("<!-- tabs -->") < html.index("nav-tab-wrapper") < html.index("<!-- /tabs -->")
    assert html.index("nav-tab-wrapper") < html.index("<form")


def test_no_tab_links_without_tabs(general_source, settings_api, hooks):
    html = _framework(general_source, settings_api, hooks).settings()

    assert "nav-tab" not in html


def test_tab_links_scoped_to_own_page(general_source, settings_api, hooks):
    tabbed = {
        "sections": [{"section_id": "general", "title": "General"}],
        "tabs": [{"id": "general", "title": "Tabbed"}],
    }
    _framework(tabbed, settings_api, hooks, group="tabbed")
    plain = _framework(general_source, settings_api, hooks, group="plain")

    assert "nav-tab" not in plain.settings()


def test_form_hooks(general_source, settings_api, hooks):
    hooks.add_action(HOOK_BEFORE_SETTINGS_FIELDS, lambda group: f"<!-- fields {group} -->")
    hooks.add_action(HOOK_AFTER_SETTINGS, lambda group: "<!-- after -->")
    framework = _framework(general_source, settings_api, hooks)

    html = framework.settings()

    assert html.index("<form") < html.index("<!-- fields demo -->") < html.index("option_page")
    assert html.index("</form>") < html.index("<!-- after -->")


def test_register_settings_hook_extends_document(general_source, settings_api, hooks):
    def add_advanced(document, option_group):
        if option_group == "demo":
            document["sections"].append(
                {
                    "section_id": "advanced",
                    "title": "Advanced",
                    "order": 5,
                    "fields": [{"id": "debug", "title": "Debug", "type": "checkbox"}],
                }
            )
        return document

    hooks.add_filter(HOOK_REGISTER_SETTINGS, add_advanced)
    framework = _framework(general_source, settings_api, hooks)

    html = framework.settings()

    assert "<h3>Advanced</h3>" in html
    assert 'name="demo_settings[demo_advanced_debug]"' in html


def test_settings_validate_runs_group_filter(general_source, settings_api, hooks):
    hooks.add_filter(
        HOOK_VALIDATE.format(option_group="demo"),
        lambda values: {k: v.upper() for k, v in values.items()},
    )
    framework = _framework(general_source, settings_api, hooks)

    assert framework.settings_validate({"demo_general_name": "bob"}) == {"demo_general_name": "BOB"}


def test_submission_round_trip(general_source, settings_api, store, hooks):
    framework = _framework(general_source, settings_api, hooks)
    html = framework.settings()
    token = re.search(r'name="_nonce" value="([^"]+)"', html).group(1)

    settings_api.process_submission(
        {
            "option_page": "demo",
            "_nonce": token,
            "demo_settings": {"demo_general_name": "Carol"},
        }
    )

    assert store.get("demo_settings") == {"demo_general_name": "Carol"}
    assert "Settings saved." in framework.admin_notices()
    assert 'value="Carol"' in framework.settings()
    assert framework.admin_notices() == ""


def test_section_intro_and_generate_setting_callbacks(settings_api, hooks):
    source = [
        {
            "section_id": "general",
            "title": "General",
            "description": "Intro text",
            "fields": [{"id": "name", "title": "Name", "default": "Bob"}],
        }
    ]
    framework = _framework(source, settings_api, hooks)
    section = framework.sections[0]

    assert framework.section_intro({"id": "general"}) == "<p>Intro text</p>"
    assert 'value="Bob"' in framework.generate_setting({"section": section, "field": section.fields[0]})


def test_reloading_source_does_not_repeat_tab_links(general_source, settings_api, hooks):
    tabbed = {
        "sections": [{"section_id": "general", "title": "General"}],
        "tabs": [{"id": "general", "title": "General"}],
    }
    framework = _framework(tabbed, settings_api, hooks)

    framework.construct_settings(tabbed)
    assert framework.settings().count("nav-tab-wrapper") == 1

    framework.construct_settings(general_source)
    assert "nav-tab" not in framework.settings()
