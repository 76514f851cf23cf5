from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from fitclub.core.rate_limit import limiter
from fitclub.database.supabase_client import get_auth_client, get_supabase
from fitclub.main import app

from tests.fakes import FakeSupabase


@pytest.fixture
def supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def client(supabase: FakeSupabase):
    app.dependency_overrides[get_supabase] = lambda: supabase
    app.dependency_overrides[get_auth_client] = lambda: supabase
    limiter.reset()
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def alice(supabase: FakeSupabase):
    return supabase.create_member("alice@fitclub.no")


@pytest.fixture
def bob(supabase: FakeSupabase):
    return supabase.create_member("bob@fitclub.no")
