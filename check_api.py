#!/usr/bin/env python3
"""
Smoke check for a running AgentConnect server
Run this after create_tables.py and start_server.py
"""

import os
import sys
import requests

BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")
HR_EMAIL = os.getenv("CHECK_EMAIL", "hr@agentconnect.com")
HR_PASSWORD = os.getenv("CHECK_PASSWORD", "password123")


def check(label, response, expected_status):
    ok = response.status_code == expected_status
    mark = "✓" if ok else "✗"
    print(f"{mark} {label}: {response.status_code} (expected {expected_status})")
    if not ok:
        print(f"  Response: {response.text}")
    return ok


def check_endpoints():
    """Walk the agent -> team member -> task lifecycle once"""

    print("Checking AgentConnect API endpoints...")
    print("=" * 50)
    results = []

    results.append(check("Health", requests.get(f"{BASE_URL}/health"), 200))

    response = requests.post(f"{BASE_URL}/api/auth/login", json={"email": HR_EMAIL, "password": HR_PASSWORD})
    if not check("Login", response, 200):
        return False
    headers = {"Authorization": f"Bearer {response.json()['token']}"}

    results.append(check("Current user", requests.get(f"{BASE_URL}/api/auth/me", headers=headers), 200))
    results.append(check("List agents", requests.get(f"{BASE_URL}/api/agents", headers=headers), 200))

    response = requests.post(f"{BASE_URL}/api/agents", headers=headers, json={
        "name": "Smoke Check Agent",
        "role": "Senior Agent",
        "office": "New York",
        "region": "Northeast",
    })
    if not check("Create agent", response, 201):
        return False
    agent_id = response.json()["id"]

    response = requests.post(f"{BASE_URL}/api/team-members", headers=headers, json={
        "name": "Smoke Check Member",
        "role": "Sales Associate",
        "agent_id": agent_id,
    })
    results.append(check("Create team member", response, 201))
    member_id = response.json().get("id")

    response = requests.post(f"{BASE_URL}/api/tasks", headers=headers, json={
        "title": "Smoke Check Task",
        "assigned_to": member_id,
        "due_date": "2025-12-01",
    })
    results.append(check("Create task", response, 201))
    task_id = response.json().get("id")

    results.append(check("Delete agent with dependents",
                         requests.delete(f"{BASE_URL}/api/agents/{agent_id}", headers=headers), 400))
    results.append(check("Delete task", requests.delete(f"{BASE_URL}/api/tasks/{task_id}", headers=headers), 200))
    results.append(check("Delete team member",
                         requests.delete(f"{BASE_URL}/api/team-members/{member_id}", headers=headers), 200))
    results.append(check("Delete agent", requests.delete(f"{BASE_URL}/api/agents/{agent_id}", headers=headers), 200))
    results.append(check("Dashboard", requests.get(f"{BASE_URL}/api/dashboard/overview", headers=headers), 200))

    print("\n" + "=" * 50)
    print(f"API check completed: {sum(results)}/{len(results)} passed")
    return all(results)


if __name__ == "__main__":
    sys.exit(0 if check_endpoints() else 1)
