"""Tests for user domain router."""

from fastapi.testclient import TestClient
from sqlmodel import Session

from chromepass.credential.models import Credential, CredentialUser
from chromepass.user.models import User, UserRole, UserState

# --- Access control ---


def test_users_requires_admin(client: TestClient):
    """Test GET /users rejects non-admin users."""
    response = client.get("/users")

    assert response.status_code == 403
    assert response.json()["type"] == "admin_required"


def test_users_requires_token(unauthenticated_client: TestClient):
    """Test GET /users without a bearer token returns 401."""
    response = unauthenticated_client.get("/users")

    assert response.status_code == 401
    assert response.json()["message"] == "No token, authorization denied"


# --- Listing ---


def test_list_users(admin_client: TestClient, admin_user: User, test_user: User):
    """Test GET /users returns users without sensitive fields."""
    response = admin_client.get("/users")

    assert response.status_code == 200
    data = response.json()
    assert {u["email"] for u in data} == {admin_user.email, test_user.email}
    for user in data:
        assert "password_hash" not in user
        assert "email_verification_token" not in user


def test_list_users_filters(admin_client: TestClient, make_user, test_user: User):
    make_user("pending@example.com", state=UserState.pending)

    by_state = admin_client.get("/users", params={"state": 0}).json()
    by_search = admin_client.get("/users", params={"search": "PENDING"}).json()
    by_role = admin_client.get("/users", params={"role": 1}).json()

    assert [u["email"] for u in by_state] == ["pending@example.com"]
    assert [u["email"] for u in by_search] == ["pending@example.com"]
    assert all(u["role"] == 1 for u in by_role)


def test_list_pending_users(admin_client: TestClient, make_user):
    make_user("pending@example.com", state=UserState.pending)

    response = admin_client.get("/users/pending")

    assert response.status_code == 200
    assert [u["email"] for u in response.json()] == ["pending@example.com"]


def test_user_stats(admin_client: TestClient, make_user):
    make_user("pending@example.com", state=UserState.pending, email_verified=False)

    response = admin_client.get("/users/stats/overview")

    assert response.status_code == 200
    data = response.json()
    assert data["total_users"] == 2
    assert data["pending_users"] == 1
    assert data["admin_users"] == 1
    assert len(data["recent_users"]) == 1


def test_get_user_not_found(admin_client: TestClient):
    response = admin_client.get("/users/9999")

    assert response.status_code == 404
    assert response.json()["type"] == "user_not_found"


# --- Lifecycle ---


def test_approve_user(admin_client: TestClient, make_user, session: Session):
    """Test PATCH /users/{id}/approve activates a verified pending user."""
    pending = make_user("pending@example.com", state=UserState.pending)

    response = admin_client.patch(f"/users/{pending.id}/approve")

    assert response.status_code == 200
    assert response.json()["state"] == UserState.active
    session.refresh(pending)
    assert pending.state == UserState.active


def test_approve_unverified_user_rejected(admin_client: TestClient, make_user):
    pending = make_user(
        "pending@example.com", state=UserState.pending, email_verified=False
    )

    response = admin_client.patch(f"/users/{pending.id}/approve")

    assert response.status_code == 400
    assert response.json()["type"] == "email_not_verified"


def test_deactivate_and_activate(admin_client: TestClient, test_user: User):
    """Test deactivate blocks and activate unblocks a user."""
    blocked = admin_client.patch(f"/users/{test_user.id}/deactivate")
    unblocked = admin_client.patch(f"/users/{test_user.id}/activate")

    assert blocked.json()["state"] == UserState.blocked
    assert unblocked.json()["state"] == UserState.active


def test_delete_user_trashes(admin_client: TestClient, test_user: User, session: Session):
    """Test DELETE /users/{id} is a soft delete."""
    response = admin_client.delete(f"/users/{test_user.id}")

    assert response.status_code == 200
    assert response.json() == {"message": "User deleted successfully"}
    session.refresh(test_user)
    assert test_user.state == UserState.trashed


def test_restore_through_state_endpoint(admin_client: TestClient, make_user):
    trashed = make_user("trashed@example.com", state=UserState.trashed)

    response = admin_client.patch(f"/users/{trashed.id}/state", json={"state": 1})

    assert response.status_code == 200
    assert response.json()["state"] == UserState.active


def test_invalid_transition(admin_client: TestClient, make_user):
    pending = make_user("pending@example.com", state=UserState.pending)

    response = admin_client.patch(f"/users/{pending.id}/state", json={"state": -1})

    assert response.status_code == 400
    assert response.json()["type"] == "invalid_state_transition"


def test_admin_cannot_modify_self(admin_client: TestClient, admin_user: User):
    for response in (
        admin_client.patch(f"/users/{admin_user.id}/deactivate"),
        admin_client.patch(f"/users/{admin_user.id}/role", json={"role": 0}),
        admin_client.put(f"/users/{admin_user.id}", json={"state": -2}),
    ):
        assert response.status_code == 400
        assert response.json()["type"] == "self_modification"


def test_deactivate_other_admin(admin_client: TestClient, make_user):
    """Blocking another admin is allowed while the acting admin stays active."""
    other_admin = make_user("second-admin@example.com", role=UserRole.admin)

    response = admin_client.patch(f"/users/{other_admin.id}/deactivate")

    assert response.status_code == 200
    assert response.json()["state"] == UserState.blocked


def test_change_role(admin_client: TestClient, test_user: User):
    response = admin_client.patch(f"/users/{test_user.id}/role", json={"role": 1})

    assert response.status_code == 200
    assert response.json()["role"] == UserRole.admin


# --- Updates ---


def test_update_user_put_and_patch(admin_client: TestClient, test_user: User):
    put = admin_client.put(f"/users/{test_user.id}", json={"first_name": "Put"})
    patch = admin_client.patch(f"/users/{test_user.id}", json={"last_name": "Patch"})

    assert put.status_code == 200
    assert patch.status_code == 200
    assert patch.json()["first_name"] == "Put"
    assert patch.json()["last_name"] == "Patch"


def test_update_user_email_conflict(
    admin_client: TestClient, test_user: User, other_user: User
):
    response = admin_client.put(f"/users/{test_user.id}", json={"email": other_user.email})

    assert response.status_code == 400
    assert response.json()["type"] == "email_exists"


# --- Assignments ---


def test_user_assignments(
    admin_client: TestClient, admin_user: User, test_user: User, session: Session
):
    credential = Credential(
        label="Mail",
        url="https://mail.example.com",
        username="svc",
        password="secret",
        created_by_id=admin_user.id,
    )
    session.add(credential)
    session.commit()
    session.add(CredentialUser(credential_id=credential.id, user_id=test_user.id))
    session.commit()

    response = admin_client.get(f"/users/{test_user.id}/assignments")

    assert response.status_code == 200
    data = response.json()
    assert data["projects"] == []
    assert [c["label"] for c in data["credentials"]] == ["Mail"]
    assert data["credentials"][0]["assignment_type"] == "direct"
