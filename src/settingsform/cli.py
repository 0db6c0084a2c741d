"""CLI main entry point."""

import json
import logging
from pathlib import Path

import click

from .config import Config
from .db import close_db, create_tables, init_db
from .errors import SettingsFormException
from .framework import SettingsFramework
from .host import AdminSettings, SignedNonceIssuer
from .i18n import initialize
from .log import setup as setup_log
from .options import delete_settings, get_setting, get_settings
from .stores import DBOptionStore
from .web import create_app

logger = logging.getLogger(__name__)


def load_config(config_path: str) -> Config:
    """Load the configuration file, falling back to defaults when it is absent."""
    if Path(config_path).exists():
        return Config.load_from_file(config_path)
    logger.debug(f"No configuration file at {config_path}, using defaults")
    return Config()


def open_settings_api(cfg: Config) -> AdminSettings:
    init_db(cfg.database_path)
    create_tables()
    return AdminSettings(DBOptionStore(), SignedNonceIssuer(cfg.web.secret_key))


@click.group()
@click.option("--config", "-c", default="config.toml", help="Configuration file path")
@click.option("--verbose", "-v", is_flag=True, help="Write logs to the console")
@click.pass_context
def cli(ctx, config: str, verbose: bool):
    """Declarative settings forms."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config

    try:
        cfg = load_config(config)
    except SettingsFormException as e:
        raise click.ClickException(str(e))

    if verbose:
        setup_log(cfg.log_file or None)
    initialize(ui_language=cfg.language)
    ctx.obj["config"] = cfg


@cli.command(name="render")
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.option("--group", "-g", default="", help="Option group (defaults to the file name)")
@click.pass_context
def render_form(ctx, source: str, group: str):
    """Print the HTML form for a settings document."""
    cfg = ctx.obj["config"]
    try:
        settings_api = open_settings_api(cfg)
        framework = SettingsFramework(
            source, group, settings_api=settings_api, form_action=cfg.form_action
        )
        framework.admin_init()
        click.echo(framework.settings())
    except SettingsFormException as e:
        logger.error(f"Failed to render {source}: {e}")
        raise click.ClickException(str(e))
    finally:
        close_db()


@cli.command(name="get")
@click.argument("group")
@click.argument("section_id")
@click.argument("field_id")
@click.pass_context
def get_value(ctx, group: str, section_id: str, field_id: str):
    """Print one stored setting."""
    try:
        value = get_setting(open_settings_api(ctx.obj["config"]), group, section_id, field_id)
    except SettingsFormException as e:
        raise click.ClickException(str(e))
    finally:
        close_db()

    if value is False:
        raise click.ClickException(f"No stored value for {group}/{section_id}/{field_id}")
    click.echo(json.dumps(value, ensure_ascii=False))


@cli.command(name="dump")
@click.argument("group")
@click.pass_context
def dump(ctx, group: str):
    """Print every stored setting of an option group as JSON."""
    try:
        values = get_settings(open_settings_api(ctx.obj["config"]), group)
    except SettingsFormException as e:
        raise click.ClickException(str(e))
    finally:
        close_db()

    click.echo(json.dumps(values, ensure_ascii=False, indent=2, sort_keys=True))


@cli.command(name="reset")
@click.argument("group")
@click.confirmation_option(prompt="Delete all stored settings for this group?")
@click.pass_context
def reset(ctx, group: str):
    """Delete the stored settings of an option group."""
    try:
        delete_settings(open_settings_api(ctx.obj["config"]), group)
    except SettingsFormException as e:
        raise click.ClickException(str(e))
    finally:
        close_db()

    click.echo(f"Deleted settings for {group}")


@cli.command(name="serve")
@click.option("--host", "-h", default=None, help="Override host from config")
@click.option("--port", "-p", default=None, type=int, help="Override port from config")
@click.option("--debug/--no-debug", default=None, help="Enable/disable debug mode")
@click.pass_context
def serve(ctx, host, port, debug):
    """Start the settings admin server."""
    cfg = ctx.obj["config"]

    host = host or cfg.web.host
    port = port or cfg.web.port
    if debug is None:
        debug = cfg.web.debug

    try:
        app = create_app(cfg)
    except SettingsFormException as e:
        logger.error(f"Application error: {e}", exc_info=True)
        raise click.ClickException(str(e))

    if debug:
        logger.warning("Debug mode is enabled. This should NOT be used in production.")

    logger.info(f"Starting server on {host}:{port}")
    app.run(host=host, port=port, debug=debug, use_reloader=debug)


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
