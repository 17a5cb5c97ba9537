"""Shared pytest fixtures."""

import os
import time

import pytest


def _set_tz(name):
    if name is None:
        os.environ.pop("TZ", None)
    else:
        os.environ["TZ"] = name
    time.tzset()


def _no_tz_control(name):
    pytest.skip("time.tzset is not available on this platform")


@pytest.fixture(autouse=True)
def local_timezone():
    """Run every test with the till's clock set to UTC.

    Yields a setter so a test can move the till to another zone.
    """
    if not hasattr(time, "tzset"):
        yield _no_tz_control
        return
    saved = os.environ.get("TZ")
    _set_tz("UTC")
    yield _set_tz
    _set_tz(saved)
