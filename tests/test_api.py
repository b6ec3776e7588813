# pyright: reportUnknownParameterType=false, reportMissingParameterType=false
import threading

import pytest

from conduit.networking import api
from conduit.networking.config import ApiConfiguration
from conduit.networking.errors import NotConfiguredError
from conduit.networking.logger import LogLevel, get_log_level


def test_starts_unconfigured():
    assert not api.is_configured()
    assert api.get_configuration() is None
    with pytest.raises(NotConfiguredError):
        api.require_configuration()


def test_configure_installs_snapshot_and_level():
    config = ApiConfiguration(
        base_url="https://api.example.com", log_level=LogLevel.DEBUG
    )

    api.configure(config)

    assert api.is_configured()
    assert api.get_configuration() is config
    assert get_log_level() is LogLevel.DEBUG


def test_reset_after_verbose():
    api.configure(
        ApiConfiguration(
            base_url="https://api.example.com", log_level=LogLevel.VERBOSE
        )
    )

    api.reset()

    assert not api.is_configured()
    assert get_log_level() is LogLevel.ERROR


def test_explicit_configuration_wins(configured):
    explicit = ApiConfiguration(base_url="https://other.example.com")

    assert api.require_configuration(explicit) is explicit
    assert api.require_configuration() is configured


def test_reconfigure_replaces_snapshot(configured):
    replacement = ApiConfiguration(base_url="https://v2.example.com")

    api.configure(replacement)

    assert api.get_configuration() is replacement
    assert configured.base_url == "https://api.example.com"


def test_set_logging_level_updates_installed_configuration(configured):
    api.set_logging_level(LogLevel.VERBOSE)

    assert get_log_level() is LogLevel.VERBOSE
    assert api.get_configuration().log_level is LogLevel.VERBOSE
    assert configured.log_level is LogLevel.ERROR


def test_set_logging_level_without_configuration():
    api.set_logging_level(LogLevel.NONE)

    assert get_log_level() is LogLevel.NONE
    assert not api.is_configured()


def test_concurrent_configure_leaves_one_snapshot():
    configs = [
        ApiConfiguration(base_url=f"https://host{i}.example.com")
        for i in range(8)
    ]
    threads = [
        threading.Thread(target=api.configure, args=(config,))
        for config in configs
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert api.get_configuration() in configs
