"""Tests for root logger setup."""
import logging
from collections.abc import Generator
from contextlib import contextmanager

from core.logging_config import LOG_FORMAT, setup_logging


@contextmanager
def isolated_root(*handlers: logging.Handler) -> Generator[logging.Logger]:
    """
    Swap the root logger's handlers for the given ones, restoring on exit.

    Used inside the test body because pytest attaches its capture handlers
    during the call phase.
    """
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    root.handlers[:] = list(handlers)
    try:
        yield root
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_setup_logging_installs_handler() -> None:
    with isolated_root() as root:
        setup_logging("debug")

        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG
        assert root.handlers[0].formatter._fmt == LOG_FORMAT


def test_setup_logging_unknown_level_falls_back_to_info() -> None:
    with isolated_root() as root:
        setup_logging("chatty")

        assert root.level == logging.INFO


def test_setup_logging_leaves_existing_handlers() -> None:
    existing = logging.NullHandler()
    with isolated_root(existing) as root:
        root.setLevel(logging.WARNING)

        setup_logging("DEBUG")

        assert root.handlers == [existing]
        assert root.level == logging.WARNING
