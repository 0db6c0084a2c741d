"""Flask host serving settings pages and handling their submissions."""

import logging
import os
from dataclasses import dataclass, field

from flask import (
    Blueprint,
    Flask,
    abort,
    current_app,
    flash,
    g,
    get_flashed_messages,
    redirect,
    render_template,
    request,
    url_for,
)

from .db import close_db, create_tables, init_db
from .errors import NonceError
from .framework import SettingsFramework
from .hooks import HookBus
from .host import AdminSettings, Notice, SignedNonceIssuer, parse_form
from .stores import DBOptionStore, OptionStore

logger = logging.getLogger(__name__)

bp = Blueprint("settings", __name__)


@dataclass
class SettingsHost:
    settings_api: AdminSettings
    hooks: HookBus
    pages: dict[str, SettingsFramework] = field(default_factory=dict)
    titles: dict[str, str] = field(default_factory=dict)


def create_app(config=None, store: OptionStore | None = None, hooks: HookBus | None = None):
    """Create and configure Flask application.

    Args:
        config: Application configuration (loaded from ``SETTINGSFORM_CONFIG``
            or ``config.toml`` when omitted)
        store: Option store; a SQLite-backed store is used when omitted
        hooks: Hook bus carrying extensions registered before the pages load

    Returns:
        Configured Flask application
    """
    from .config import Config

    if config is None:
        config_file = os.environ.get("SETTINGSFORM_CONFIG", "config.toml")
        config = Config.load_from_file(config_file)

    app = Flask(__name__)
    app.secret_key = config.web.secret_key
    app.config["config"] = config

    if store is None:
        init_db(config.database_path)
        create_tables()
        store = DBOptionStore()

        @app.teardown_appcontext
        def shutdown_db_session(exception=None):
            """Close database connection after each request."""
            close_db()

    hooks = hooks or HookBus()
    settings_api = AdminSettings(
        store, SignedNonceIssuer(config.web.secret_key), notices=request_notices
    )
    host = SettingsHost(settings_api=settings_api, hooks=hooks)

    for page in config.pages:
        framework = SettingsFramework(
            page.source,
            page.get_option_group(),
            settings_api=settings_api,
            hooks=hooks,
            form_action=config.form_action,
        )
        framework.admin_init()
        group = framework.get_option_group()
        host.pages[group] = framework
        host.titles[group] = page.title or group
        logger.info(f"Settings page ready: {group} ({page.source})")

    app.extensions["settingsform"] = host
    app.register_blueprint(bp)
    app.add_url_rule(
        config.form_action,
        endpoint="save_options",
        view_func=save_options,
        methods=["POST"],
    )

    return app


def get_host() -> SettingsHost:
    return current_app.extensions["settingsform"]


def request_notices() -> list[Notice]:
    """Notices raised while handling the current request."""
    return g.setdefault("settingsform_notices", [])


@bp.route("/")
def index():
    """List the configured settings pages."""
    host = get_host()
    return render_template("index.html", pages=host.titles)


@bp.route("/settings/<group>")
def settings_page(group: str):
    """Render one settings page with its notices and form."""
    host = get_host()
    framework = host.pages.get(group)
    if framework is None:
        abort(404)

    for category, message in get_flashed_messages(with_categories=True):
        host.settings_api.add_settings_error("general", "settings_updated", message, category)

    return render_template(
        "admin.html",
        title=host.titles[group],
        notices=framework.admin_notices(),
        form=framework.settings(),
    )


def save_options():
    """Validate, sanitize and persist a submitted settings form."""
    host = get_host()
    form = parse_form(request.form.items(multi=True))

    try:
        group = host.settings_api.process_submission(form)
    except NonceError as e:
        logger.warning(f"Rejected settings submission: {e}")
        abort(403)

    for notice in host.settings_api.get_settings_errors(clear=True):
        flash(notice.message, notice.type.value)

    return redirect(url_for("settings.settings_page", group=group, **{"settings-updated": "true"}))
