# Shared pytest configuration: headless Qt for the worker tests and a fresh
# cache fixture. Worker tests skip themselves when PyQt6 is not installed.

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from colorkit.cache import ColorCache  # noqa: E402


@pytest.fixture
def cache():
    return ColorCache(max_entries=64)
