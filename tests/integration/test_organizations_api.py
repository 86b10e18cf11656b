"""Integration tests for organization endpoints and guided setup."""


class TestOrganizationCrud:
    """Tests for GET/POST /organizations."""

    def test_create_and_list(self, admin_client):
        response = admin_client.post("/organizations", json={"name": "Ridge Barn", "type": "stable"})

        assert response.status_code == 201
        organization = response.json()["organization"]
        assert organization["name"] == "Ridge Barn"
        assert organization["subscription_tier"] == "basic"
        assert organization["is_active"] is True

        listed = admin_client.get("/organizations").json()["organizations"]
        assert [org["id"] for org in listed] == [organization["id"]]
        assert listed[0]["member_count"] == 0

    def test_missing_type_is_a_400(self, admin_client):
        response = admin_client.post("/organizations", json={"name": "No Type"})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["type"] == "validation_error"
        assert any(error.startswith("type:") for error in body["errors"])

    def test_unknown_type_rejected(self, admin_client):
        response = admin_client.post("/organizations", json={"name": "Circus", "type": "circus"})

        assert response.status_code == 400

    def test_live_member_counts(self, admin_client, provision):
        provision()

        listed = admin_client.get("/organizations").json()["organizations"]

        assert listed[0]["member_count"] == 1


class TestOrganizationSetup:
    """Tests for POST /organizations/setup."""

    def test_stable_setup(self, admin_client, provision):
        body = provision()

        assert body["success"] is True
        assert body["message"] == "Organization created successfully"
        assert body["organization"]["type"] == "stable"
        assert body["organization"]["owner_id"] == body["owner_id"]
        assert len(body["role_ids"]) == 4
        assert body["steps_completed"] == [
            "create_owner_account",
            "create_organization",
            "create_roles",
            "link_owner",
            "create_profile",
        ]

    def test_trainer_setup_creates_trainer_roles(self, admin_client, provision):
        body = provision(type="trainer", name="Hilltop Training", owner_email="coach@hilltop.example")

        roles = admin_client.get("/roles", params={"organization_id": body["organization"]["id"]}).json()["roles"]

        assert {role["name"] for role in roles} == {"Head Trainer", "Trainer", "Assistant Trainer", "Client"}
        assert body["organization"]["settings"]["accepts_training_requests"] is True

    def test_owner_is_member_with_admin_role(self, admin_client, provision):
        body = provision()

        members = admin_client.get(
            "/organization-members", params={"organization_id": body["organization"]["id"]}
        ).json()["members"]

        assert len(members) == 1
        assert members[0]["user_id"] == body["owner_id"]
        assert members[0]["role"]["name"] == "Stable Owner"
        assert members[0]["account"]["email"] == "owner@willowcreek.example"

    def test_duplicate_owner_email_is_a_409_and_writes_nothing(self, admin_client, provision):
        provision()

        response = admin_client.post("/organizations/setup", json={
            "name": "Second Barn",
            "type": "stable",
            "owner_email": "owner@willowcreek.example",
            "owner_name": "Someone Else",
            "owner_password": "anotherpassword",
        })

        assert response.status_code == 409
        body = response.json()
        assert body["type"] == "provisioning_error"
        assert body["failed_step"] == "create_owner_account"
        assert body["rolled_back"] == []
        assert body["errors"] == ["A user with this email address has already been registered"]
        assert len(admin_client.get("/organizations").json()["organizations"]) == 1

    def test_invalid_owner_email(self, admin_client):
        response = admin_client.post("/organizations/setup", json={
            "name": "Bad Email Barn",
            "type": "stable",
            "owner_email": "not-an-email",
            "owner_name": "Jane",
            "owner_password": "securepassword123",
        })

        assert response.status_code == 400
        assert any(error.startswith("owner_email:") for error in response.json()["errors"])
