"""An AI-narrated text adventure escape room."""

from .cli import app
from .config import Config

__all__ = ["main", "app", "Config"]


def main() -> None:
    """Entry point for the escape room console game."""
    app()
