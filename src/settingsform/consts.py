"""Constants for settingsform"""

# ==================== File Paths ====================
DATABASE_PATH = "data/settingsform.db"
LOG_FILE = "data/settingsform.log"

# ==================== Database ====================
DB_MAX_CONNECTIONS = 8
DB_STALE_TIMEOUT = 300  # seconds
DB_PRAGMAS = {
    "journal_mode": "wal",
    "foreign_keys": 1,
}

# ==================== Option Storage ====================
OPTION_NAME_SUFFIX = "_settings"

# ==================== Form ====================
DEFAULT_FORM_ACTION = "/options"
NONCE_FIELD = "_nonce"
OPTION_PAGE_FIELD = "option_page"
ACTION_FIELD = "action"
NONCE_MAX_AGE = 24 * 60 * 60  # seconds
SOURCE_SUFFIXES = (".toml", ".json")

# ==================== Hook Names ====================
HOOK_REGISTER_SETTINGS = "register_settings"
HOOK_FIELD_DEFAULTS = "field_defaults"
HOOK_VALIDATE = "{option_group}_settings_validate"
HOOK_BEFORE_FIELD = "before_field"
HOOK_AFTER_FIELD = "after_field"
HOOK_BEFORE_SETTINGS = "before_settings"
HOOK_BEFORE_SETTINGS_FIELDS = "before_settings_fields"
HOOK_AFTER_SETTINGS = "after_settings"
HOOK_BEFORE_TAB_LINKS = "before_tab_links"
HOOK_AFTER_TAB_LINKS = "after_tab_links"

# ==================== Template Names ====================
TEMPLATE_FORM = "form.html"
TEMPLATE_TAB_LINKS = "tab_links.html"
TEMPLATE_SECTIONS = "sections.html"
TEMPLATE_SECTION_INTRO = "section_intro.html"
TEMPLATE_NOTICES = "notices.html"
TEMPLATE_HIDDEN_FIELDS = "hidden_fields.html"
TEMPLATE_EDITOR = "editor.html"
TEMPLATE_FIELD = "fields/{type}.html"
