"""Projects/Organizations API 통합 테스트"""

import pytest


class TestOrganizationAPI:
    """조직 API"""

    @pytest.mark.asyncio
    async def test_create_and_get_organization(self, client, api_key_header):
        created = await client.post(
            "/api/v1/organizations", json={"name": "acme"}, headers=api_key_header
        )
        assert created.status_code == 201
        organization_id = created.json()["data"]["id"]

        response = await client.get(
            f"/api/v1/organizations/{organization_id}", headers=api_key_header
        )

        assert response.status_code == 200
        assert response.json()["data"]["name"] == "acme"

    @pytest.mark.asyncio
    async def test_duplicate_name_returns_409(self, client, api_key_header, factory):
        await factory.organization("acme")

        response = await client.post(
            "/api/v1/organizations", json={"name": "acme"}, headers=api_key_header
        )

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_organization_not_found(self, client, api_key_header):
        response = await client.get(
            "/api/v1/organizations/9999", headers=api_key_header
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "ORGANIZATION_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_add_member(self, client, api_key_header, factory):
        org = await factory.organization()
        user = await factory.user()

        response = await client.post(
            f"/api/v1/organizations/{org.id}/members",
            json={"user_id": user.id, "role": "admin"},
            headers=api_key_header,
        )
        again = await client.post(
            f"/api/v1/organizations/{org.id}/members",
            json={"user_id": user.id},
            headers=api_key_header,
        )

        assert response.status_code == 201
        assert response.json()["data"]["role"] == "admin"
        assert again.status_code == 409


class TestProjectAPI:
    """프로젝트 API"""

    @pytest.mark.asyncio
    async def test_create_organization_project(self, client, api_key_header, factory):
        org = await factory.organization()

        response = await client.post(
            f"/api/v1/organizations/{org.id}/projects",
            json={"name": "web", "project_scope": "private"},
            headers=api_key_header,
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["organization_id"] == org.id
        assert data["project_scope"] == "private"

    @pytest.mark.asyncio
    async def test_create_personal_project_defaults_to_public(
        self, client, api_key_header
    ):
        created = await client.post(
            "/api/v1/projects", json={"name": "sandbox"}, headers=api_key_header
        )
        project_id = created.json()["data"]["id"]

        response = await client.get(
            f"/api/v1/projects/{project_id}", headers=api_key_header
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["organization_id"] is None
        assert data["project_scope"] == "public"

    @pytest.mark.asyncio
    async def test_add_project_member_unknown_user(
        self, client, api_key_header, factory
    ):
        project = await factory.project()

        response = await client.post(
            f"/api/v1/projects/{project.id}/members",
            json={"user_id": 9999},
            headers=api_key_header,
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "USER_NOT_FOUND"
