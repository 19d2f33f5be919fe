"""Shared pytest fixtures and helpers."""

from .store import *  # noqa: F401,F403
