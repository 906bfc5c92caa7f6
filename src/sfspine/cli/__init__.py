"""sforce-spine command line interface."""

from sfspine.cli.app import app

__all__ = ["app"]
