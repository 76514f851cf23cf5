from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from starlette.requests import Request

from fitclub.core.auth_gateway import AuthGateway, extract_bearer_token

from tests.fakes import FakeSupabase


def _request(authorization=None) -> Request:
    headers = []
    if authorization is not None:
        headers.append((b"authorization", authorization.encode()))
    return Request({"type": "http", "method": "GET", "path": "/", "headers": headers})


@pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer ", "Basic abc123", "Token abc123"])
def test_missing_or_malformed_header_is_unauthenticated(header):
    supabase = MagicMock()
    gateway = AuthGateway(supabase)

    assert gateway.authenticate(_request(header)) is None
    supabase.auth.get_user.assert_not_called()


def test_extract_bearer_token():
    assert extract_bearer_token(_request("Bearer abc.def.ghi")) == "abc.def.ghi"
    assert extract_bearer_token(_request("bearer abc")) == "abc"


def test_valid_token_yields_caller_identity():
    supabase = FakeSupabase()
    member = supabase.create_member("carol@fitclub.no")

    caller = AuthGateway(supabase).authenticate(_request(f"Bearer {member.token}"))

    assert caller is not None
    assert caller.id == member.id
    assert caller.email == "carol@fitclub.no"
    assert caller.claims["role"] == "authenticated"


def test_provider_error_is_swallowed():
    supabase = MagicMock()
    supabase.auth.get_user.side_effect = Exception("JWT expired")

    assert AuthGateway(supabase).authenticate(_request("Bearer expired")) is None


def test_provider_returning_no_user_is_unauthenticated():
    supabase = MagicMock()
    supabase.auth.get_user.return_value = MagicMock(user=None)

    assert AuthGateway(supabase).authenticate(_request("Bearer revoked")) is None


def test_invalid_token_on_protected_route_is_401(client):
    response = client.get("/api/workouts", headers={"Authorization": "Bearer forged"})

    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}
