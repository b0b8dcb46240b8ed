"""Intent-specific command parsers."""

from . import session, tasks, views

__all__ = ["session", "tasks", "views"]
