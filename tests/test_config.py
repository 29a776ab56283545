import logging
from pathlib import Path

import pytest

from ttcli.config import configure_logging, default_running_file, resolve_settings


def test_default_running_file_uses_home():
    assert default_running_file({"HOME": "/home/ada"}) == Path("/home/ada/.tt_running")


def test_default_running_file_without_home():
    assert default_running_file({}) == Path(".tt_running")


def test_resolve_settings_prefers_explicit_running_file(tmp_path):
    settings = resolve_settings(tmp_path / "entries", tmp_path / "running", "debug", environ={"HOME": "/nowhere"})
    assert settings.running_file == tmp_path / "running"
    assert settings.log_level == "DEBUG"


def test_resolve_settings_falls_back_to_default():
    settings = resolve_settings(Path("entries"), None, environ={"HOME": "/home/ada"})
    assert settings.running_file == Path("/home/ada/.tt_running")


def test_configure_logging_sets_level():
    configure_logging("info")
    assert logging.getLogger().level == logging.INFO


def test_configure_logging_rejects_unknown_level():
    with pytest.raises(ValueError):
        configure_logging("chatty")
