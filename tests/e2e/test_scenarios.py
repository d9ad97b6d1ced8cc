"""이슈 보드 사용 시나리오 E2E 테스트

API만으로 조직 → 프로젝트 → 마일스톤 → 이슈 흐름을 진행하며
마일스톤 카운터와 검색 결과가 함께 맞는지 확인합니다.
"""

import pytest


class TestRequestTracking:
    """요청 추적 E2E 시나리오 테스트"""

    @pytest.mark.asyncio
    async def test_multiple_requests_different_ids(self, client):
        """다중 요청에 대한 고유 Request ID"""
        response1 = await client.get("/api/v1/")
        response2 = await client.get("/api/v1/")

        assert response1.headers["x-request-id"] != response2.headers["x-request-id"]

    @pytest.mark.asyncio
    async def test_invalid_api_version_returns_404(self, client):
        """존재하지 않는 API 버전은 404"""
        response = await client.get("/api/v99/")

        assert response.status_code == 404


class TestMilestoneScenario:
    """마일스톤 진행 시나리오"""

    @pytest.mark.asyncio
    async def test_release_milestone_lifecycle(self, client, api_key_header):
        # 1. 사용자, 조직, 프로젝트 준비
        alice = (
            await client.post(
                "/api/v1/users",
                json={"login_id": "alice", "name": "Alice"},
                headers=api_key_header,
            )
        ).json()["data"]
        bob = (
            await client.post(
                "/api/v1/users",
                json={"login_id": "bob", "name": "Bob"},
                headers=api_key_header,
            )
        ).json()["data"]
        org = (
            await client.post(
                "/api/v1/organizations", json={"name": "acme"}, headers=api_key_header
            )
        ).json()["data"]
        project = (
            await client.post(
                f"/api/v1/organizations/{org['id']}/projects",
                json={"name": "web"},
                headers=api_key_header,
            )
        ).json()["data"]
        project_url = f"/api/v1/projects/{project['id']}"
        as_alice = {**api_key_header, "X-User-Id": str(alice["id"])}

        # 2. 마일스톤과 이슈 3개
        milestone = (
            await client.post(
                f"{project_url}/milestones",
                json={"title": "v1.0", "due_date": "2026-12-01"},
                headers=api_key_header,
            )
        ).json()["data"]
        milestone_url = f"{project_url}/milestones/{milestone['id']}"

        issue_ids = []
        for title in ("Signup page", "Login page", "Reset password"):
            created = await client.post(
                f"{project_url}/issues",
                json={
                    "title": title,
                    "body": "@bob please review",
                    "milestone_id": milestone["id"],
                    "assignee_id": bob["id"],
                },
                headers=as_alice,
            )
            assert created.status_code == 201
            issue_ids.append(created.json()["data"]["id"])

        # 3. 두 개를 닫으면 완료율 66%
        for issue_id in issue_ids[:2]:
            await client.post(
                f"/api/v1/issues/{issue_id}/state",
                json={"state": "closed"},
                headers=api_key_header,
            )
        progress = (await client.get(milestone_url, headers=api_key_header)).json()[
            "data"
        ]
        assert progress["num_open_issues"] == 1
        assert progress["num_closed_issues"] == 2
        assert progress["completion_rate"] == 66

        # 4. 조직 검색: bob이 멘션/담당된 열린 이슈
        org_search = await client.get(
            f"/api/v1/organizations/{org['id']}/issues",
            params={"mention_id": bob["id"], "assignee_id": bob["id"]},
            headers=as_alice,
        )
        assert [i["title"] for i in org_search.json()["data"]] == ["Reset password"]

        # 5. 남은 이슈를 마일스톤에서 빼면 열린 마일스톤 목록에서 사라짐
        await client.patch(
            f"/api/v1/issues/{issue_ids[2]}",
            json={"milestone_id": None},
            headers=api_key_header,
        )
        open_milestones = await client.get(
            f"{project_url}/milestones",
            params={"state": "open"},
            headers=api_key_header,
        )
        assert open_milestones.json()["data"] == []

        # 6. 마일스톤 삭제 후 "마일스톤 없음" 검색에 모두 나옴
        await client.delete(milestone_url, headers=api_key_header)
        unplanned = await client.get(
            f"{project_url}/issues",
            params={"milestone_id": -1, "state": "all"},
            headers=api_key_header,
        )
        assert unplanned.json()["meta"]["total"] == 3
