"""Tests for credential domain router."""

from fastapi.testclient import TestClient
from sqlmodel import Session

from chromepass.credential.models import Credential
from chromepass.user.models import User

CREDENTIAL_PAYLOAD = {
    "label": "Mail",
    "url": "https://mail.example.com",
    "username": "svc",
    "password": "s3cret",
}


def _create_credential(client: TestClient, **overrides) -> dict:
    response = client.post("/credentials", json={**CREDENTIAL_PAYLOAD, **overrides})
    assert response.status_code == 201, response.text
    return response.json()


def _create_team(client: TestClient, name: str, member_ids: list[int]) -> int:
    response = client.post("/teams", json={"name": name, "member_ids": member_ids})
    assert response.status_code == 201, response.text
    return response.json()["id"]


# --- CRUD ---


def test_create_credential(client: TestClient, test_user: User):
    data = _create_credential(client)

    assert data["label"] == "Mail"
    assert data["password"] == "s3cret"
    assert data["created_by_id"] == test_user.id
    assert data["use_count"] == 0
    assert data["last_used"] is None


def test_create_credential_with_project_and_grants(
    client: TestClient, other_user: User, client_for
):
    project = client.post("/projects", json={"name": "Infra"}).json()

    data = _create_credential(
        client, project_id=project["id"], user_ids=[other_user.id]
    )

    assert data["project_name"] == "Infra"
    visible = client_for(other_user).get("/credentials").json()
    assert [c["id"] for c in visible] == [data["id"]]


def test_create_credential_unknown_project(client: TestClient):
    response = client.post("/credentials", json={**CREDENTIAL_PAYLOAD, "project_id": 9999})

    assert response.status_code == 404


def test_create_credential_unknown_user_grant(client: TestClient, session: Session):
    response = client.post("/credentials", json={**CREDENTIAL_PAYLOAD, "user_ids": [9999]})

    assert response.status_code == 404


def test_list_credentials_visibility(
    client: TestClient, admin_client: TestClient
):
    _create_credential(client, label="Mine")
    _create_credential(admin_client, label="Admin only")

    mine = client.get("/credentials").json()
    admin_mine = admin_client.get("/credentials").json()
    admin_all = admin_client.get("/credentials", params={"scope": "all"}).json()

    assert [c["label"] for c in mine] == ["Mine"]
    assert [c["label"] for c in admin_mine] == ["Admin only"]
    assert {c["label"] for c in admin_all} == {"Mine", "Admin only"}


def test_list_credentials_search_and_project_filter(client: TestClient):
    project = client.post("/projects", json={"name": "Infra"}).json()
    _create_credential(
        client, label="Database", url="https://db.example.com", project_id=project["id"]
    )
    _create_credential(client, label="Mail")

    by_project = client.get("/credentials", params={"project_id": project["id"]}).json()
    by_search = client.get("/credentials", params={"search": "mai"}).json()

    assert [c["label"] for c in by_project] == ["Database"]
    assert [c["label"] for c in by_search] == ["Mail"]


def test_get_credential_access(
    client: TestClient, admin_client: TestClient, client_for, other_user: User
):
    credential = _create_credential(client)

    assert client.get(f"/credentials/{credential['id']}").status_code == 200
    assert admin_client.get(f"/credentials/{credential['id']}").status_code == 200
    denied = client_for(other_user).get(f"/credentials/{credential['id']}")
    assert denied.status_code == 403
    assert denied.json()["type"] == "not_owner"


def test_update_credential(client: TestClient):
    credential = _create_credential(client)

    response = client.put(
        f"/credentials/{credential['id']}",
        json={"password": "rotated", "url_pattern": "*.example.com"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["password"] == "rotated"
    assert data["url_pattern"] == "*.example.com"
    assert data["label"] == "Mail"


def test_update_credential_replaces_grants(
    client: TestClient, other_user: User, make_user, client_for
):
    third = make_user("third@example.com")
    credential = _create_credential(client, user_ids=[other_user.id])

    client.put(f"/credentials/{credential['id']}", json={"user_ids": [third.id]})

    users = client.get(f"/credentials/{credential['id']}/users").json()
    assert [u["id"] for u in users] == [third.id]
    assert client_for(other_user).get("/credentials").json() == []


def test_update_credential_requires_owner(
    client: TestClient, client_for, other_user: User
):
    credential = _create_credential(client, user_ids=[other_user.id])

    response = client_for(other_user).put(
        f"/credentials/{credential['id']}", json={"password": "mine now"}
    )

    assert response.status_code == 403
    assert response.json()["message"] == "Not authorized to update this credential"


def test_delete_credential(client: TestClient, session: Session):
    credential = _create_credential(client)

    response = client.delete(f"/credentials/{credential['id']}")

    assert response.status_code == 200
    assert response.json() == {"message": "Credential deleted successfully"}
    row = session.get(Credential, credential["id"])
    session.refresh(row)
    assert row.is_active is False
    assert client.get("/credentials").json() == []
    assert client.get(f"/credentials/{credential['id']}").status_code == 404


# --- Extension ---


def test_for_url(client: TestClient):
    _create_credential(client, label="Wildcard", url="https://example.com", url_pattern="*.example.com")
    _create_credential(client, label="Exact", url="https://example.org")

    app_match = client.get("/credentials/for-url", params={"url": "https://app.example.com"})
    org_match = client.get("/credentials/for-url", params={"url": "https://example.org"})

    assert [c["label"] for c in app_match.json()] == ["Wildcard"]
    assert [c["label"] for c in org_match.json()] == ["Exact"]


def test_for_url_requires_url(client: TestClient):
    response = client.get("/credentials/for-url")

    assert response.status_code == 400
    assert response.json()["message"] == "URL is required"


def test_record_use(client: TestClient, session: Session):
    credential = _create_credential(client)

    response = client.post(f"/credentials/{credential['id']}/use")

    assert response.status_code == 200
    assert response.json() == {"message": "Usage recorded"}
    data = client.get(f"/credentials/{credential['id']}").json()
    assert data["use_count"] == 1
    assert data["last_used"] is not None


def test_record_use_requires_access(client: TestClient, client_for, other_user: User):
    credential = _create_credential(client)

    response = client_for(other_user).post(f"/credentials/{credential['id']}/use")

    assert response.status_code == 403


def test_projects_list(client: TestClient):
    infra = client.post("/projects", json={"name": "Infra"}).json()
    client.post("/projects", json={"name": "Unused"})
    _create_credential(client, project_id=infra["id"])

    response = client.get("/credentials/projects/list")

    assert response.json() == [{"id": infra["id"], "name": "Infra"}]


# --- Assignments ---


def test_team_assignment_grants_access(
    client: TestClient, other_user: User, client_for
):
    credential = _create_credential(client)
    team_id = _create_team(client, "QA", [other_user.id])

    response = client.post(f"/credentials/{credential['id']}/teams", json={"team_id": team_id})

    assert response.json() == {"message": "Team assigned successfully"}
    member_view = client_for(other_user).get("/credentials").json()
    assert [c["id"] for c in member_view] == [credential["id"]]
    teams = client.get(f"/credentials/{credential['id']}/teams").json()
    assert [t["id"] for t in teams] == [team_id]


def test_provenance_direct_priority(client: TestClient, other_user: User, make_user):
    """A user reachable directly and through a team is listed once as direct."""
    teammate = make_user("teammate@example.com")
    credential = _create_credential(client)
    team_id = _create_team(client, "QA", [teammate.id, other_user.id])
    client.post(f"/credentials/{credential['id']}/teams", json={"team_id": team_id})
    client.post(f"/credentials/{credential['id']}/users", json={"user_id": other_user.id})

    users = client.get(f"/credentials/{credential['id']}/users").json()

    assert [(u["id"], u["assignment_type"]) for u in users] == [
        (other_user.id, "direct"),
        (teammate.id, "team"),
    ]
    assert len({u["id"] for u in users}) == len(users)


def test_unassign_credential_user(client: TestClient, other_user: User, client_for):
    credential = _create_credential(client, user_ids=[other_user.id])

    removed = client.delete(f"/credentials/{credential['id']}/users/{other_user.id}")
    missing = client.delete(f"/credentials/{credential['id']}/users/{other_user.id}")

    assert removed.json() == {"message": "User removed successfully"}
    assert missing.status_code == 404
    assert client_for(other_user).get("/credentials").json() == []


def test_unassign_credential_team(client: TestClient):
    credential = _create_credential(client)
    team_id = _create_team(client, "QA", [])
    client.post(f"/credentials/{credential['id']}/teams", json={"team_id": team_id})

    response = client.delete(f"/credentials/{credential['id']}/teams/{team_id}")

    assert response.json() == {"message": "Team removed successfully"}
    assert client.get(f"/credentials/{credential['id']}/teams").json() == []


def test_assignment_changes_require_owner(
    client: TestClient, client_for, other_user: User
):
    credential = _create_credential(client)

    response = client_for(other_user).post(
        f"/credentials/{credential['id']}/users", json={"user_id": other_user.id}
    )

    assert response.status_code == 403
    assert response.json()["message"] == "Not authorized to modify this credential"
