"""Logging handles passed explicitly into API clients."""

from .logger import ClientLogger, setup_logging

__all__ = ["ClientLogger", "setup_logging"]
