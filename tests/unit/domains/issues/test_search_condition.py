"""검색 조건 값 객체와 멘션 추출 테스트"""

import dataclasses
from datetime import date

import pytest

from app.domains.issues.mentions import extract_login_ids
from app.domains.issues.models import State
from app.domains.issues.schemas import IssueSearchParams
from app.domains.issues.search import (
    DEFAULT_ORDER_BY,
    DEFAULT_ORDER_DIR,
    SearchCondition,
)


class TestSearchCondition:
    """SearchCondition"""

    def test_defaults(self):
        condition = SearchCondition()

        assert condition.order_by == DEFAULT_ORDER_BY == "createdDate"
        assert condition.order_dir == DEFAULT_ORDER_DIR == "desc"
        assert condition.page_num == 1
        assert condition.state == "open"
        assert condition.commented_check is False
        assert condition.label_ids == frozenset()
        assert condition.project_names is None

    def test_copy_resets_page(self):
        condition = SearchCondition(filter="crash", page_num=4, author_id=3)

        copied = condition.copy()

        assert copied.page_num == 1
        assert copied.filter == "crash"
        assert copied.author_id == 3
        assert condition.page_num == 4

    def test_is_immutable(self):
        condition = SearchCondition()

        with pytest.raises(dataclasses.FrozenInstanceError):
            condition.page_num = 2  # type: ignore[misc]

    def test_due_date_string(self):
        assert SearchCondition().due_date_string is None
        assert (
            SearchCondition(due_date=date(2026, 3, 9)).due_date_string == "2026-03-09"
        )

    @pytest.mark.parametrize(
        "text,expected",
        [(None, False), ("", False), ("   ", False), ("bug", True)],
    )
    def test_has_filter_text(self, text, expected):
        assert SearchCondition(filter=text).has_filter_text is expected

    def test_is_filtered_by_project(self):
        assert SearchCondition().is_filtered_by_project is False
        assert SearchCondition(project_names=("web",)).is_filtered_by_project is True


class TestIssueSearchParams:
    """쿼리 파라미터 → 검색 조건 변환"""

    def test_to_condition(self):
        params = IssueSearchParams(
            order_by="title",
            order_dir="asc",
            filter="login",
            state="closed",
            commented_check=True,
            milestone_id=-1,
            label_ids=[2, 1, 2],
            author_id=None,
            assignee_id=5,
            commenter_id=None,
            mention_id=None,
            due_date=date(2026, 1, 31),
            project_names=[],
        )

        condition = params.to_condition(page=3)

        assert condition.page_num == 3
        assert condition.order_by == "title"
        assert condition.state == "closed"
        assert condition.label_ids == frozenset({1, 2})
        assert condition.milestone_id == -1
        # 빈 목록은 "이름 필터 없음"
        assert condition.project_names is None


class TestState:
    """State 토큰 해석"""

    @pytest.mark.parametrize(
        "token,expected",
        [
            ("open", State.OPEN),
            ("CLOSED", State.CLOSED),
            ("All", State.ALL),
            ("unknown", None),
            ("", None),
            (None, None),
        ],
    )
    def test_from_token(self, token, expected):
        assert State.from_token(token) is expected

    def test_compares_with_stored_value(self):
        assert State.OPEN == "open"


class TestExtractLoginIds:
    """본문 멘션 추출"""

    def test_extracts_in_order_without_duplicates(self):
        text = "@alice 확인 부탁드립니다. cc @bob, @Alice"

        assert extract_login_ids(text) == ["alice", "bob"]

    def test_strips_trailing_punctuation(self):
        assert extract_login_ids("thanks @carol.") == ["carol"]
        assert extract_login_ids("ask @dave-") == ["dave"]

    def test_keeps_inner_dots(self):
        assert extract_login_ids("@first.last 님") == ["first.last"]

    def test_ignores_email_addresses(self):
        assert extract_login_ids("mail me at foo@example.com") == []

    @pytest.mark.parametrize("text", [None, "", "no mentions here", "@ alone"])
    def test_no_mentions(self, text):
        assert extract_login_ids(text) == []
