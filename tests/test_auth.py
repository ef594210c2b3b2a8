from datetime import timedelta

from app.models import Role, User
from app.utils.auth import authorize
from app.utils.security import create_access_token
from tests.conftest import TEST_PASSWORD


class TestRegister:
    def test_register_defaults_to_member(self, client):
        response = client.post("/api/auth/register", json={
            "username": "newuser",
            "email": "new.user@example.com",
            "password": "secret123",
        })

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "User registered successfully"
        assert body["user"]["role"] == "member"
        assert body["user"]["email"] == "new.user@example.com"
        assert "password_hash" not in body["user"]
        assert body["token"]

    def test_register_requires_fields(self, client):
        response = client.post("/api/auth/register", json={"email": "partial@example.com"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Missing required fields"
        assert set(body["required"]) == {"username", "password"}

    def test_register_rejects_duplicate_email(self, client, users):
        response = client.post("/api/auth/register", json={
            "username": "again",
            "email": "hr@example.com",
            "password": "secret123",
        })

        assert response.status_code == 400
        assert response.json() == {"error": "Email already exists"}

    def test_register_rejects_unknown_role(self, client):
        response = client.post("/api/auth/register", json={
            "username": "boss",
            "email": "boss@example.com",
            "password": "secret123",
            "role": "admin",
        })

        assert response.status_code == 400
        assert "role" in response.json()["error"]

    def test_register_rejects_reserved_domain(self, client):
        response = client.post("/api/auth/register", json={
            "username": "lan",
            "email": "u@corp.local",
            "password": "secret123",
        })

        assert response.status_code == 400
        assert "email" in response.json()["error"]


class TestLogin:
    def test_wrong_password_is_rejected(self, client, users):
        response = client.post("/api/auth/login", json={"email": "hr@example.com", "password": "wrong"})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid credentials"}

    def test_unknown_email_is_rejected(self, client, users):
        response = client.post("/api/auth/login", json={"email": "nobody@example.com", "password": TEST_PASSWORD})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid credentials"}

    def test_malformed_email_is_rejected_as_bad_credentials(self, client, users):
        response = client.post("/api/auth/login", json={"email": "nobody", "password": "x"})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid credentials"}

    def test_reserved_domain_login_is_bad_credentials(self, client, users):
        response = client.post("/api/auth/login", json={"email": "u@corp.local", "password": TEST_PASSWORD})

        assert response.status_code == 401

    def test_login_token_is_accepted_by_me(self, client, users):
        response = client.post("/api/auth/login", json={"email": "agent@example.com", "password": TEST_PASSWORD})

        assert response.status_code == 200
        body = response.json()
        assert body["user"]["role"] == "agent"

        me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['token']}"})
        assert me.status_code == 200
        assert me.json()["id"] == users["agent"].id
        assert me.json()["email"] == "agent@example.com"

    def test_login_requires_fields(self, client):
        response = client.post("/api/auth/login", json={"email": "hr@example.com"})

        assert response.status_code == 400
        assert response.json()["required"] == ["password"]


class TestAuthenticate:
    def test_missing_token(self, client):
        response = client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json() == {"error": "No token provided"}
        assert response.headers["www-authenticate"] == "Bearer"

    def test_garbage_token(self, client):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid token"}

    def test_token_signed_with_other_secret(self, client, users, settings):
        settings_copy = type(settings)(database_url="sqlite://", secret_key="someone-else")
        token = create_access_token(users["hr"], settings_copy)

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid token"}

    def test_expired_token(self, client, users, settings):
        token = create_access_token(users["hr"], settings, expires_delta=timedelta(minutes=-5))

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid token"}

    def test_deleted_user_loses_access(self, client, db, users, hr_headers):
        db.query(User).filter(User.id == users["hr"].id).delete()
        db.commit()

        response = client.get("/api/auth/me", headers=hr_headers)

        assert response.status_code == 401
        assert response.json() == {"error": "User not found"}


class TestAuthorize:
    def test_membership(self):
        assert authorize("hr", {Role.HR, Role.AGENT})
        assert authorize("agent", {Role.HR, Role.AGENT})
        assert not authorize("member", {Role.HR, Role.AGENT})

    def test_unknown_role_is_denied(self):
        assert not authorize("admin", {Role.HR})
        assert not authorize("", set(Role))

    def test_member_cannot_list_agents(self, client, member_headers):
        response = client.get("/api/agents", headers=member_headers)

        assert response.status_code == 403
        assert response.json() == {"error": "Unauthorized role"}

    def test_agent_role_cannot_create_agents(self, client, agent_headers):
        response = client.post("/api/agents", headers=agent_headers, json={
            "name": "Blocked",
            "role": "Agent",
            "office": "Boston",
            "region": "Northeast",
        })

        assert response.status_code == 403

    def test_denied_request_has_no_side_effects(self, client, agent, agent_headers, hr_headers):
        agent_id = agent.id

        response = client.delete(f"/api/agents/{agent_id}", headers=agent_headers)

        assert response.status_code == 403
        assert client.get(f"/api/agents/{agent_id}", headers=hr_headers).status_code == 200

    def test_agent_role_can_read(self, client, agent_headers):
        assert client.get("/api/agents", headers=agent_headers).status_code == 200
        assert client.get("/api/team-members", headers=agent_headers).status_code == 200
        assert client.get("/api/tasks", headers=agent_headers).status_code == 200
