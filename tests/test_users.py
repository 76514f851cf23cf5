from __future__ import annotations

from types import SimpleNamespace

import pytest

from tests.fakes import auth_header


@pytest.fixture
def signed_up(client, supabase):
    """Member created through the sign-up route, so a profile row exists."""
    response = client.post(
        "/api/auth/signup",
        json={"email": "dana@fitclub.no", "password": "secret1", "displayName": "Dana"},
    )
    user_id = response.json()["userId"]
    return SimpleNamespace(id=user_id, token=supabase.auth.issue_token(user_id))


def test_get_my_profile(client, signed_up):
    response = client.get("/api/users/me", headers=auth_header(signed_up))

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == signed_up.id
    assert body["email"] == "dana@fitclub.no"
    assert body["displayName"] == "Dana"
    assert body["membershipType"] == "basic"
    assert body["membershipExpiry"]


def test_profile_missing_is_404(client, alice):
    response = client.get("/api/users/me", headers=auth_header(alice))

    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


def test_other_profile_is_forbidden(client, signed_up, alice):
    assert client.get(f"/api/users/{signed_up.id}", headers=auth_header(alice)).status_code == 403
    response = client.put(
        f"/api/users/{signed_up.id}", json={"displayName": "Mallory"}, headers=auth_header(alice)
    )
    assert response.status_code == 403


def test_invalid_update_of_other_profile_is_403(client, supabase, signed_up, alice):
    response = client.put(
        f"/api/users/{signed_up.id}", json={"displayName": "x" * 101}, headers=auth_header(alice)
    )

    assert response.status_code == 403
    assert ("user_profiles", "update") not in supabase.calls


def test_update_display_name(client, supabase, signed_up):
    [before] = [dict(r) for r in supabase.rows("user_profiles")]

    response = client.put(
        f"/api/users/{signed_up.id}",
        json={"displayName": "Dana K", "membershipType": "vip"},
        headers=auth_header(signed_up),
    )

    assert response.status_code == 200
    assert response.json()["displayName"] == "Dana K"
    [after] = supabase.rows("user_profiles")
    assert after["membership_type"] == "basic"
    assert after["created_at"] == before["created_at"]
    assert after["updated_at"] >= before["updated_at"]


def test_profile_requires_auth(client):
    assert client.get("/api/users/me").status_code == 401
