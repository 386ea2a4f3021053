"""
Unit test configuration.

pydantic-settings must never read a real .env file or inherit OTP tuning
from the host environment: tests set config only through monkeypatch.
"""

import os

import pytest


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    import pydantic_settings.sources.providers.dotenv as ps_dotenv

    monkeypatch.setattr(ps_dotenv, "dotenv_values", lambda *a, **kw: {})
    for name in list(os.environ):
        if name.startswith("OTP_"):
            monkeypatch.delenv(name)
