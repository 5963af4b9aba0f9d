import logging

import pytest

from journal_api.observability.logging import resolve_level


def test_resolve_level_accepts_names_and_numbers() -> None:
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level(" WARNING ") == logging.WARNING
    assert resolve_level(logging.ERROR) == logging.ERROR


def test_resolve_level_rejects_unknown_names() -> None:
    with pytest.raises(ValueError):
        resolve_level("chatty")
