from app.models import TeamMember
from app.schemas import AgentCreate, TeamMemberCreate


def test_create_team_member(client, hr_headers, agent):
    response = client.post("/api/team-members", headers=hr_headers, json={
        "name": "Lisa Chen",
        "role": "Customer Service",
        "agent_id": agent.id,
    })

    assert response.status_code == 201
    body = response.json()
    assert body["agent_id"] == agent.id
    assert body["active_status"] is True


def test_agent_role_can_create_team_member(client, agent_headers, agent):
    response = client.post("/api/team-members", headers=agent_headers, json={
        "name": "Lisa Chen",
        "role": "Customer Service",
        "agent_id": agent.id,
    })

    assert response.status_code == 201


def test_create_team_member_for_missing_agent(client, hr_headers, db):
    response = client.post("/api/team-members", headers=hr_headers, json={
        "name": "Orphan",
        "role": "Assistant",
        "agent_id": 9999,
    })

    assert response.status_code == 400
    assert response.json() == {"error": "Agent does not exist"}
    assert db.query(TeamMember).count() == 0


def test_create_team_member_requires_fields(client, hr_headers):
    response = client.post("/api/team-members", headers=hr_headers, json={"name": "No Role"})

    assert response.status_code == 400
    assert set(response.json()["required"]) == {"role", "agent_id"}


def test_list_filters_by_agent(client, hr_headers, manager, team_member):
    other = manager.create_agent(AgentCreate(name="Sarah", role="Team Lead", office="LA", region="West"))
    manager.create_team_member(TeamMemberCreate(name="David Lee", role="Assistant", agent_id=other.id))

    response = client.get("/api/team-members", headers=hr_headers, params={"agent_id": team_member.agent_id})

    assert [m["name"] for m in response.json()] == ["Mike Brown"]
    assert len(client.get("/api/team-members", headers=hr_headers).json()) == 2


def test_by_agent_requires_agent_id(client, hr_headers, team_member):
    response = client.get("/api/team-members/by-agent", headers=hr_headers)

    assert response.status_code == 400
    assert response.json() == {"error": "Agent ID is required", "required": ["agent_id"]}

    response = client.get("/api/team-members/by-agent", headers=hr_headers, params={"agent_id": team_member.agent_id})
    assert [m["id"] for m in response.json()] == [team_member.id]


def test_update_team_member_coalesces(client, hr_headers, team_member):
    response = client.patch(f"/api/team-members/{team_member.id}", headers=hr_headers, json={"role": "Lead"})

    assert response.status_code == 200
    assert response.json()["role"] == "Lead"
    assert response.json()["name"] == "Mike Brown"


def test_update_team_member_to_missing_agent(client, hr_headers, team_member):
    response = client.patch(f"/api/team-members/{team_member.id}", headers=hr_headers, json={"agent_id": 9999})

    assert response.status_code == 400
    assert response.json() == {"error": "Agent does not exist"}
    assert client.get(f"/api/team-members/{team_member.id}", headers=hr_headers).json()["agent_id"] != 9999


def test_update_missing_team_member(client, hr_headers):
    response = client.patch("/api/team-members/9999", headers=hr_headers, json={"name": "Ghost"})

    assert response.status_code == 404
    assert response.json() == {"error": "Team member not found"}


def test_delete_team_member_with_tasks_is_blocked(client, hr_headers, task):
    member_id = task.assigned_to

    response = client.delete(f"/api/team-members/{member_id}", headers=hr_headers)

    assert response.status_code == 400
    assert response.json() == {"error": "Cannot delete team member: team member has associated tasks"}
    assert client.get(f"/api/team-members/{member_id}", headers=hr_headers).status_code == 200


def test_delete_team_member(client, hr_headers, team_member):
    member_id = team_member.id

    assert client.delete(f"/api/team-members/{member_id}", headers=hr_headers).status_code == 200
    assert client.delete(f"/api/team-members/{member_id}", headers=hr_headers).status_code == 404
