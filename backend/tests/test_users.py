from tests.helpers import auth_headers, create_case


class TestListUsers:
    async def test_lists_active_users_without_emails(self, client, caregiver, manager, make_user):
        await make_user("inactive@council.gov.uk", "Ivy", "Inactive", is_active=False)

        response = await client.get("/api/users", headers=auth_headers(caregiver))

        assert response.status_code == 200
        users = response.json()
        assert [(u["firstName"], u["lastName"]) for u in users] == [("Jane", "Manager"), ("John", "Carer")]
        assert {u["role"] for u in users} == {"caregiver", "manager"}
        assert all("email" not in u for u in users)

    async def test_requires_authentication(self, client):
        response = await client.get("/api/users")

        assert response.status_code == 401


class TestProfile:
    async def test_get_profile(self, client, caregiver):
        response = await client.get("/api/users/profile", headers=auth_headers(caregiver))

        assert response.status_code == 200
        assert response.json()["email"] == caregiver.email

    async def test_update_name_and_email(self, client, caregiver):
        response = await client.put(
            "/api/users/profile",
            json={"name": "Johnny Van Carer", "email": "Johnny.Carer@Council.gov.uk"},
            headers=auth_headers(caregiver),
        )

        assert response.status_code == 200
        body = response.json()
        assert body["firstName"] == "Johnny"
        assert body["lastName"] == "Van Carer"
        assert body["email"] == "johnny.carer@council.gov.uk"
        assert body["role"] == "caregiver"

    async def test_name_and_email_required(self, client, caregiver):
        response = await client.put("/api/users/profile", json={"name": "John"}, headers=auth_headers(caregiver))

        assert response.status_code == 400
        assert response.json()["message"] == "Name and email are required"

    async def test_single_word_name_is_rejected(self, client, caregiver):
        response = await client.put(
            "/api/users/profile", json={"name": "John", "email": caregiver.email},
            headers=auth_headers(caregiver),
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Please provide both a first and last name"

    async def test_extra_spaces_in_name_still_match_assignments(self, client, caregiver, manager):
        response = await client.put(
            "/api/users/profile", json={"name": "  Johnny   Carer ", "email": caregiver.email},
            headers=auth_headers(caregiver),
        )
        assert response.json()["lastName"] == "Carer"

        case = await create_case(client, manager, assignedSocialWorkers=["Johnny Carer"])
        visible = await client.get(f"/api/cases/{case['id']}", headers=auth_headers(caregiver))

        assert visible.status_code == 200

    async def test_email_must_stay_on_gov_uk(self, client, caregiver):
        response = await client.put(
            "/api/users/profile", json={"name": "John Carer", "email": "john@example.com"},
            headers=auth_headers(caregiver),
        )

        assert response.status_code == 400

    async def test_email_in_use(self, client, caregiver, other_caregiver):
        response = await client.put(
            "/api/users/profile", json={"name": "John Carer", "email": other_caregiver.email},
            headers=auth_headers(caregiver),
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Email is already in use"

    async def test_caregiver_cannot_promote_themselves(self, client, caregiver):
        response = await client.put(
            "/api/users/profile",
            json={"name": "John Carer", "email": caregiver.email, "role": "manager"},
            headers=auth_headers(caregiver),
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Role changes require a manager"

        profile = await client.get("/api/users/profile", headers=auth_headers(caregiver))
        assert profile.json()["role"] == "caregiver"

    async def test_invalid_role(self, client, manager):
        response = await client.put(
            "/api/users/profile",
            json={"name": "Jane Manager", "email": manager.email, "role": "admin"},
            headers=auth_headers(manager),
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid role"

    async def test_manager_can_change_own_role(self, client, manager):
        response = await client.put(
            "/api/users/profile",
            json={"name": "Jane Manager", "email": manager.email, "role": "caregiver"},
            headers=auth_headers(manager),
        )

        assert response.status_code == 200
        assert response.json()["role"] == "caregiver"


class TestChangePassword:
    async def test_change_password_then_login(self, client, caregiver):
        response = await client.put(
            "/api/users/change-password",
            json={"currentPassword": "Password123!", "newPassword": "NewPassword456!"},
            headers=auth_headers(caregiver),
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Password changed successfully"

        old = await client.post("/api/auth/login", json={"email": caregiver.email, "password": "Password123!"})
        new = await client.post("/api/auth/login", json={"email": caregiver.email, "password": "NewPassword456!"})
        assert old.status_code == 400
        assert new.status_code == 200

    async def test_wrong_current_password(self, client, caregiver):
        response = await client.put(
            "/api/users/change-password",
            json={"currentPassword": "nope-nope", "newPassword": "NewPassword456!"},
            headers=auth_headers(caregiver),
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Current password is incorrect"

    async def test_new_password_too_short(self, client, caregiver):
        response = await client.put(
            "/api/users/change-password",
            json={"currentPassword": "Password123!", "newPassword": "abc"},
            headers=auth_headers(caregiver),
        )

        assert response.status_code == 400
        assert response.json()["message"] == "New password must be at least 6 characters long"

    async def test_both_passwords_required(self, client, caregiver):
        response = await client.put(
            "/api/users/change-password", json={"currentPassword": "Password123!"},
            headers=auth_headers(caregiver),
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Current password and new password are required"
