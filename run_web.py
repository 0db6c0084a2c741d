#!/usr/bin/env python
"""Web server startup script for local development."""

import sys
from pathlib import Path

from settingsform.config import Config
from settingsform.i18n import initialize
from settingsform.log import setup as setup_log
from settingsform.web import create_app


def main():
    """Start the settings admin server."""
    config_path = sys.argv[1] if len(sys.argv) > 1 else "config.toml"

    if not Path(config_path).exists():
        print(f"Configuration file not found: {config_path}")
        sys.exit(1)

    config = Config.load_from_file(config_path)
    setup_log(config.log_file or None)
    initialize(ui_language=config.language)

    if not config.pages:
        print("No settings pages configured.")
        print("Add at least one [[pages]] entry with a source to config.toml")
        sys.exit(1)

    host = config.web.host
    port = config.web.port

    print(f"Starting web service on http://{host}:{port}")
    print("Press Ctrl+C to stop")

    app = create_app(config)
    app.run(host=host, port=port, debug=config.web.debug, use_reloader=False)


if __name__ == "__main__":
    main()
