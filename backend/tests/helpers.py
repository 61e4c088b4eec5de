"""Request payloads and shortcuts shared by the API tests."""
from httpx import AsyncClient

from socialcare.auth import create_token
from socialcare.models.user import User


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_token(user)}"}


def case_payload(**overrides) -> dict:
    payload = {
        "caseId": "CASE-202501-001",
        "clientFullName": "Alice Smith",
        "dateOfBirth": "1980-01-01",
        "clientReferenceNumber": "REF-001",
        "caseType": "Adult Social Care",
    }
    payload.update(overrides)
    return payload


def task_payload(**overrides) -> dict:
    payload = {
        "title": "Review care plan",
        "description": "Quarterly review",
        "assignedTo": "John Carer",
        "dueDate": "2030-02-01T10:00:00Z",
        "caseId": "CASE-202501-001",
        "caseName": "Alice Smith",
    }
    payload.update(overrides)
    return payload


def meeting_payload(**overrides) -> dict:
    payload = {
        "title": "Home visit",
        "scheduledAt": "2030-03-01T09:30:00Z",
        "caseId": "CASE-202501-001",
        "caseName": "Alice Smith",
    }
    payload.update(overrides)
    return payload


async def create_case(client: AsyncClient, user: User, **overrides) -> dict:
    response = await client.post("/api/cases", json=case_payload(**overrides), headers=auth_headers(user))
    assert response.status_code == 201, response.text
    return response.json()


async def create_task(client: AsyncClient, user: User, **overrides) -> dict:
    response = await client.post("/api/tasks", json=task_payload(**overrides), headers=auth_headers(user))
    assert response.status_code == 201, response.text
    return response.json()


async def create_meeting(client: AsyncClient, user: User, **overrides) -> dict:
    response = await client.post("/api/meetings", json=meeting_payload(**overrides), headers=auth_headers(user))
    assert response.status_code == 201, response.text
    return response.json()
