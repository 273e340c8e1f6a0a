"""plugingate command-line interface."""

from plugingate.cli.app import app

__all__ = ["app"]
