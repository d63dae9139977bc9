"""Pytest configuration and fixtures."""

import os

# Settings are read at import time; keep test runs off the log file and
# away from any real Supabase project.
os.environ["LOG_TO_FILE"] = "false"
os.environ["SUPABASE_URL"] = ""
os.environ["SUPABASE_KEY"] = ""

import pytest

from fakes import FakeSupabase, FakeRepository


@pytest.fixture
def fake_supabase():
    return FakeSupabase()


@pytest.fixture
def fake_repository():
    return FakeRepository()
