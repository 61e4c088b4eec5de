import pytest

from tests.helpers import auth_headers, create_case, create_task


class TestCaseComments:
    async def test_add_and_list_oldest_first(self, client, caregiver):
        case = await create_case(client, caregiver)
        headers = auth_headers(caregiver)
        url = f"/api/cases/{case['id']}/comments"

        first = await client.post(url, json={"text": "First visit done"}, headers=headers)
        second = await client.post(url, json={"text": "Follow-up booked"}, headers=headers)

        assert first.status_code == 201
        body = first.json()
        assert body["text"] == "First visit done"
        assert body["userId"] == caregiver.id
        assert body["userFirstName"] == "John"
        assert body["userLastName"] == "Carer"
        assert body["caseId"] == case["id"]

        listing = await client.get(url, headers=headers)
        assert [c["id"] for c in listing.json()] == [first.json()["id"], second.json()["id"]]

    @pytest.mark.parametrize("text", ["", "   ", None])
    async def test_blank_text_is_rejected(self, client, caregiver, text):
        case = await create_case(client, caregiver)

        response = await client.post(
            f"/api/cases/{case['id']}/comments", json={"text": text}, headers=auth_headers(caregiver)
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Comment text is required"

    async def test_text_is_trimmed(self, client, caregiver):
        case = await create_case(client, caregiver)

        response = await client.post(
            f"/api/cases/{case['id']}/comments", json={"text": "  Called GP  "}, headers=auth_headers(caregiver)
        )

        assert response.json()["text"] == "Called GP"

    async def test_assigned_worker_can_comment(self, client, manager, other_caregiver):
        case = await create_case(client, manager, assignedSocialWorkers=["Olivia Other"])

        response = await client.post(
            f"/api/cases/{case['id']}/comments", json={"text": "Visited today"}, headers=auth_headers(other_caregiver)
        )

        assert response.status_code == 201

    async def test_unrelated_caregiver_cannot_see_or_comment(self, client, caregiver, other_caregiver):
        case = await create_case(client, caregiver)
        headers = auth_headers(other_caregiver)
        url = f"/api/cases/{case['id']}/comments"

        assert (await client.get(url, headers=headers)).status_code == 404
        assert (await client.post(url, json={"text": "Hello"}, headers=headers)).status_code == 404

    async def test_only_author_can_delete(self, client, caregiver, manager):
        case = await create_case(client, caregiver)
        comment = await client.post(
            f"/api/cases/{case['id']}/comments", json={"text": "Note"}, headers=auth_headers(caregiver)
        )
        comment_id = comment.json()["id"]

        by_manager = await client.delete(f"/api/case-comments/{comment_id}", headers=auth_headers(manager))
        assert by_manager.status_code == 404
        assert by_manager.json()["message"] == "Comment not found or you do not have permission to delete it"

        by_author = await client.delete(f"/api/case-comments/{comment_id}", headers=auth_headers(caregiver))
        assert by_author.status_code == 200
        assert by_author.json()["message"] == "Comment deleted successfully"

        listing = await client.get(f"/api/cases/{case['id']}/comments", headers=auth_headers(caregiver))
        assert listing.json() == []

    async def test_deleting_case_removes_comments(self, client, caregiver, manager):
        case = await create_case(client, caregiver)
        comment = await client.post(
            f"/api/cases/{case['id']}/comments", json={"text": "Note"}, headers=auth_headers(caregiver)
        )

        await client.delete(f"/api/cases/{case['id']}", headers=auth_headers(caregiver))

        response = await client.delete(
            f"/api/case-comments/{comment.json()['id']}", headers=auth_headers(caregiver)
        )
        assert response.status_code == 404


class TestTaskComments:
    async def test_add_and_list_newest_first(self, client, caregiver):
        task = await create_task(client, caregiver)
        headers = auth_headers(caregiver)
        url = f"/api/tasks/{task['id']}/comments"

        first = await client.post(url, json={"text": "Started"}, headers=headers)
        second = await client.post(url, json={"text": "Waiting on GP"}, headers=headers)

        assert first.status_code == 201
        assert first.json()["taskId"] == task["id"]

        listing = await client.get(url, headers=headers)
        assert [c["id"] for c in listing.json()] == [second.json()["id"], first.json()["id"]]

    @pytest.mark.parametrize("text", ["", "\t  \n"])
    async def test_blank_text_is_rejected(self, client, caregiver, text):
        task = await create_task(client, caregiver)

        response = await client.post(
            f"/api/tasks/{task['id']}/comments", json={"text": text}, headers=auth_headers(caregiver)
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Comment text is required"

    async def test_manager_can_comment_on_any_task(self, client, caregiver, manager):
        task = await create_task(client, caregiver)

        response = await client.post(
            f"/api/tasks/{task['id']}/comments", json={"text": "Please prioritise"}, headers=auth_headers(manager)
        )

        assert response.status_code == 201
        assert response.json()["userFirstName"] == "Jane"

    async def test_other_caregiver_cannot_comment(self, client, caregiver, other_caregiver):
        task = await create_task(client, caregiver)

        response = await client.post(
            f"/api/tasks/{task['id']}/comments", json={"text": "Hi"}, headers=auth_headers(other_caregiver)
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Task not found"

    async def test_only_author_can_delete(self, client, caregiver, manager):
        task = await create_task(client, caregiver)
        comment = await client.post(
            f"/api/tasks/{task['id']}/comments", json={"text": "Mine"}, headers=auth_headers(caregiver)
        )
        comment_id = comment.json()["id"]

        by_manager = await client.delete(f"/api/task-comments/{comment_id}", headers=auth_headers(manager))
        by_author = await client.delete(f"/api/task-comments/{comment_id}", headers=auth_headers(caregiver))

        assert by_manager.status_code == 404
        assert by_author.status_code == 200
