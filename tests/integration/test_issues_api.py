"""Issues API 통합 테스트"""

import pytest

from app.domains.issues.models import State
from app.domains.projects.models import ProjectScope


class TestProjectIssueAPI:
    """프로젝트 이슈 생성/검색"""

    @pytest.mark.asyncio
    async def test_create_issue_with_milestone(self, client, api_key_header, factory):
        # Given
        author = await factory.user("alice")
        project = await factory.project()
        milestone = await factory.milestone(project)
        label = await factory.label(project, "bug")

        # When
        response = await client.post(
            f"/api/v1/projects/{project.id}/issues",
            json={
                "title": "Login fails",
                "body": "see logs @alice",
                "milestone_id": milestone.id,
                "label_ids": [label.id],
                "due_date": "2026-11-30",
            },
            headers={**api_key_header, "X-User-Id": str(author.id)},
        )
        milestone_response = await client.get(
            f"/api/v1/projects/{project.id}/milestones/{milestone.id}",
            headers=api_key_header,
        )

        # Then
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["state"] == "open"
        assert data["author_id"] == author.id
        assert data["due_date_string"] == "2026-11-30"
        assert [label["name"] for label in data["labels"]] == ["bug"]
        assert milestone_response.json()["data"]["num_open_issues"] == 1

    @pytest.mark.asyncio
    async def test_create_issue_anonymous(self, client, api_key_header, factory):
        project = await factory.project()

        response = await client.post(
            f"/api/v1/projects/{project.id}/issues",
            json={"title": "Anonymous report"},
            headers=api_key_header,
        )

        assert response.status_code == 201
        assert response.json()["data"]["author_id"] is None

    @pytest.mark.asyncio
    async def test_create_with_foreign_milestone_returns_400(
        self, client, api_key_header, factory
    ):
        project = await factory.project()
        foreign = await factory.milestone(await factory.project())

        response = await client.post(
            f"/api/v1/projects/{project.id}/issues",
            json={"title": "t", "milestone_id": foreign.id},
            headers=api_key_header,
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MILESTONE_NOT_IN_PROJECT"

    @pytest.mark.asyncio
    async def test_search_project_issues(self, client, api_key_header, factory):
        project = await factory.project()
        await factory.issue(project, title="Crash on save", created_offset_days=1)
        await factory.issue(project, title="Crash on load", created_offset_days=2)
        await factory.issue(project, title="Typo", created_offset_days=3)
        await factory.issue(project, title="Crash closed", state=State.CLOSED)

        response = await client.get(
            f"/api/v1/projects/{project.id}/issues",
            params={"filter": "crash", "size": 1},
            headers=api_key_header,
        )

        assert response.status_code == 200
        body = response.json()
        assert [issue["title"] for issue in body["data"]] == ["Crash on load"]
        assert body["meta"]["total"] == 2
        assert body["meta"]["has_next"] is True

    @pytest.mark.asyncio
    async def test_search_without_milestone(self, client, api_key_header, factory):
        project = await factory.project()
        milestone = await factory.milestone(project)
        await factory.issue(project, title="planned", milestone=milestone)
        await factory.issue(project, title="unplanned")

        response = await client.get(
            f"/api/v1/projects/{project.id}/issues",
            params={"milestone_id": -1},
            headers=api_key_header,
        )

        assert [issue["title"] for issue in response.json()["data"]] == ["unplanned"]

    @pytest.mark.asyncio
    async def test_search_by_labels(self, client, api_key_header, factory):
        project = await factory.project()
        bug = await factory.label(project, "bug")
        ui = await factory.label(project, "ui")
        await factory.issue(project, title="bug only", labels=[bug])
        await factory.issue(project, title="ui only", labels=[ui])
        await factory.issue(project, title="plain")

        response = await client.get(
            f"/api/v1/projects/{project.id}/issues",
            params=[
                ("label_ids", bug.id),
                ("label_ids", ui.id),
                ("order_by", "title"),
                ("order_dir", "asc"),
            ],
            headers=api_key_header,
        )

        assert [issue["title"] for issue in response.json()["data"]] == [
            "bug only",
            "ui only",
        ]

    @pytest.mark.asyncio
    async def test_invalid_order_returns_400(self, client, api_key_header, factory):
        project = await factory.project()

        response = await client.get(
            f"/api/v1/projects/{project.id}/issues",
            params={"order_by": "priority"},
            headers=api_key_header,
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_SORT_KEY"

    @pytest.mark.asyncio
    async def test_unknown_project_returns_404(self, client, api_key_header):
        response = await client.get(
            "/api/v1/projects/9999/issues", headers=api_key_header
        )

        assert response.status_code == 404


class TestOrganizationIssueAPI:
    """조직 이슈 검색 (가시성)"""

    @pytest.mark.asyncio
    async def test_visibility_depends_on_requester(
        self, client, api_key_header, factory
    ):
        org = await factory.organization()
        public = await factory.project("public", organization=org)
        private = await factory.project(
            "private", organization=org, scope=ProjectScope.PRIVATE
        )
        await factory.issue(public, title="public issue")
        await factory.issue(private, title="private issue")
        member = await factory.user("member")
        await factory.project_member(private, member)
        url = f"/api/v1/organizations/{org.id}/issues"

        anonymous = await client.get(url, headers=api_key_header)
        as_member = await client.get(
            url,
            params={"order_by": "title", "order_dir": "asc"},
            headers={**api_key_header, "X-User-Id": str(member.id)},
        )

        assert [i["title"] for i in anonymous.json()["data"]] == ["public issue"]
        assert [i["title"] for i in as_member.json()["data"]] == [
            "private issue",
            "public issue",
        ]

    @pytest.mark.asyncio
    async def test_project_names_filter(self, client, api_key_header, factory):
        org = await factory.organization()
        web = await factory.project("Web", organization=org)
        api = await factory.project("api", organization=org)
        await factory.issue(web, title="web issue")
        await factory.issue(api, title="api issue")

        response = await client.get(
            f"/api/v1/organizations/{org.id}/issues",
            params={"project_names": "web"},
            headers=api_key_header,
        )

        assert [i["title"] for i in response.json()["data"]] == ["web issue"]

    @pytest.mark.asyncio
    async def test_unknown_organization_returns_404(self, client, api_key_header):
        response = await client.get(
            "/api/v1/organizations/9999/issues", headers=api_key_header
        )

        assert response.status_code == 404


class TestIssueLifecycleAPI:
    """이슈 수정/상태 변경/댓글/삭제"""

    @pytest.mark.asyncio
    async def test_close_and_reopen(self, client, api_key_header, factory):
        project = await factory.project()
        milestone = await factory.milestone(project)
        created = await client.post(
            f"/api/v1/projects/{project.id}/issues",
            json={"title": "t", "milestone_id": milestone.id},
            headers=api_key_header,
        )
        issue_id = created.json()["data"]["id"]
        milestone_url = f"/api/v1/projects/{project.id}/milestones/{milestone.id}"

        closed = await client.post(
            f"/api/v1/issues/{issue_id}/state",
            json={"state": "closed"},
            headers=api_key_header,
        )
        after_close = (await client.get(milestone_url, headers=api_key_header)).json()
        reopened = await client.post(
            f"/api/v1/issues/{issue_id}/state",
            json={"state": "open"},
            headers=api_key_header,
        )
        after_reopen = (await client.get(milestone_url, headers=api_key_header)).json()

        assert closed.json()["data"]["state"] == "closed"
        assert after_close["data"]["completion_rate"] == 100
        assert reopened.json()["data"]["state"] == "open"
        assert after_reopen["data"]["num_open_issues"] == 1
        assert after_reopen["data"]["completion_rate"] == 0

    @pytest.mark.asyncio
    async def test_state_all_is_rejected(self, client, api_key_header, factory):
        issue = await factory.issue(await factory.project())

        response = await client.post(
            f"/api/v1/issues/{issue.id}/state",
            json={"state": "all"},
            headers=api_key_header,
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_ISSUE_STATE"

    @pytest.mark.asyncio
    async def test_patch_only_sent_fields(self, client, api_key_header, factory):
        project = await factory.project()
        issue = await factory.issue(project, title="old", body="keep me")

        response = await client.patch(
            f"/api/v1/issues/{issue.id}",
            json={"title": "new"},
            headers=api_key_header,
        )

        data = response.json()["data"]
        assert data["title"] == "new"
        assert data["body"] == "keep me"

    @pytest.mark.asyncio
    async def test_comment_counts(self, client, api_key_header, factory):
        project = await factory.project()
        commenter = await factory.user("carol")
        issue = await factory.issue(project)

        response = await client.post(
            f"/api/v1/issues/{issue.id}/comments",
            json={"contents": "looking into it"},
            headers={**api_key_header, "X-User-Id": str(commenter.id)},
        )
        commented = await client.get(
            f"/api/v1/projects/{project.id}/issues",
            params={"commenter_id": commenter.id},
            headers=api_key_header,
        )

        assert response.status_code == 201
        assert response.json()["data"]["author_id"] == commenter.id
        assert [i["id"] for i in commented.json()["data"]] == [issue.id]
        assert commented.json()["data"][0]["num_of_comments"] == 1

    @pytest.mark.asyncio
    async def test_delete_issue(self, client, api_key_header, factory):
        issue = await factory.issue(await factory.project())

        response = await client.delete(
            f"/api/v1/issues/{issue.id}", headers=api_key_header
        )
        missing = await client.get(f"/api/v1/issues/{issue.id}", headers=api_key_header)

        assert response.status_code == 200
        assert missing.status_code == 404
        assert missing.json()["error"]["code"] == "ISSUE_NOT_FOUND"


class TestLabelAPI:
    """라벨 API"""

    @pytest.mark.asyncio
    async def test_create_and_list_labels(self, client, api_key_header, factory):
        project = await factory.project()
        url = f"/api/v1/projects/{project.id}/labels"

        created = await client.post(
            url, json={"category": "type", "name": "bug"}, headers=api_key_header
        )
        duplicate = await client.post(
            url, json={"category": "type", "name": "bug"}, headers=api_key_header
        )
        listed = await client.get(url, headers=api_key_header)

        assert created.status_code == 201
        assert created.json()["data"]["color"] == "#999999"
        assert duplicate.status_code == 409
        assert [label["name"] for label in listed.json()["data"]] == ["bug"]
