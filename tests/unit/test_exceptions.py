"""예외 단위 테스트"""

from app.core.exceptions import (
    BadRequestException,
    ConflictException,
    ErrorCode,
    InvalidSortKeyException,
    NotFoundException,
    UnauthorizedException,
)
from app.domains.issues.exceptions import (
    InvalidIssueStateException,
    IssueErrorCode,
    IssueNotFoundException,
    LabelAlreadyExistsException,
    LabelNotFoundException,
    MilestoneNotInProjectException,
)
from app.domains.milestones.exceptions import (
    MilestoneErrorCode,
    MilestoneNotFoundException,
)
from app.domains.projects.exceptions import (
    OrganizationNotFoundException,
    ProjectErrorCode,
    ProjectNotFoundException,
)
from app.domains.users.exceptions import (
    LoginIdAlreadyExistsException,
    UserErrorCode,
    UserNotFoundException,
)


class TestGlobalExceptions:
    """전역 예외 테스트"""

    def test_not_found_exception(self):
        """NotFoundException 기본값"""
        exc = NotFoundException()

        assert exc.status_code == 404
        assert exc.error_code == ErrorCode.NOT_FOUND
        assert exc.message == "리소스를 찾을 수 없습니다."
        assert exc.detail_info == {}

    def test_not_found_exception_custom(self):
        """NotFoundException 커스텀 메시지"""
        exc = NotFoundException(
            message="댓글을 찾을 수 없습니다.",
            detail={"comment_id": 7},
        )

        assert exc.message == "댓글을 찾을 수 없습니다."
        assert exc.detail_info == {"comment_id": 7}

    def test_status_codes(self):
        """예외별 상태 코드/에러 코드"""
        cases = [
            (BadRequestException(), 400, ErrorCode.BAD_REQUEST),
            (UnauthorizedException(), 401, ErrorCode.UNAUTHORIZED),
            (ConflictException(), 409, ErrorCode.CONFLICT),
        ]

        for exc, status_code, error_code in cases:
            assert exc.status_code == status_code
            assert exc.error_code == error_code

    def test_invalid_sort_key_exception(self):
        """InvalidSortKeyException은 요청 값만 detail에 담음"""
        exc = InvalidSortKeyException(sort="priority")

        assert exc.status_code == 400
        assert exc.error_code == ErrorCode.INVALID_SORT_KEY
        assert exc.detail_info == {"sort": "priority"}

    def test_invalid_sort_key_exception_with_direction(self):
        exc = InvalidSortKeyException(sort="title", direction="sideways")

        assert exc.detail_info == {"sort": "title", "direction": "sideways"}


class TestDomainExceptions:
    """도메인 예외 테스트"""

    def test_user_not_found_exception(self):
        exc = UserNotFoundException(user_id=123)

        assert exc.status_code == 404
        assert exc.error_code == UserErrorCode.USER_NOT_FOUND
        assert exc.message == "사용자를 찾을 수 없습니다."
        assert exc.detail_info == {"user_id": 123}

    def test_login_id_already_exists_exception(self):
        exc = LoginIdAlreadyExistsException(login_id="alice")

        assert exc.status_code == 409
        assert exc.error_code == UserErrorCode.LOGIN_ID_ALREADY_EXISTS
        assert exc.detail_info == {"login_id": "alice"}

    def test_project_and_organization_not_found(self):
        project = ProjectNotFoundException(project_id=1)
        organization = OrganizationNotFoundException(organization_id=2)

        assert project.error_code == ProjectErrorCode.PROJECT_NOT_FOUND
        assert organization.error_code == ProjectErrorCode.ORGANIZATION_NOT_FOUND
        assert organization.status_code == 404

    def test_milestone_not_found_exception(self):
        exc = MilestoneNotFoundException(milestone_id=9)

        assert exc.status_code == 404
        assert exc.error_code == MilestoneErrorCode.MILESTONE_NOT_FOUND
        assert exc.detail_info == {"milestone_id": 9}

    def test_issue_not_found_exception(self):
        exc = IssueNotFoundException(issue_id=5)

        assert exc.status_code == 404
        assert exc.error_code == IssueErrorCode.ISSUE_NOT_FOUND

    def test_label_not_found_sorts_missing_ids(self):
        exc = LabelNotFoundException(label_ids={3, 1})

        assert exc.status_code == 404
        assert exc.detail_info == {"label_ids": [1, 3]}

    def test_label_already_exists_exception(self):
        exc = LabelAlreadyExistsException("type", "bug")

        assert exc.status_code == 409
        assert exc.detail_info == {"category": "type", "name": "bug"}

    def test_invalid_issue_state_exception(self):
        exc = InvalidIssueStateException(state="all")

        assert exc.status_code == 400
        assert exc.error_code == IssueErrorCode.INVALID_ISSUE_STATE

    def test_milestone_not_in_project_exception(self):
        exc = MilestoneNotInProjectException(milestone_id=4, project_id=2)

        assert exc.status_code == 400
        assert exc.detail_info == {"milestone_id": 4, "project_id": 2}
