"""본문 멘션(@login_id) 추출"""

import re

# 이메일(foo@bar.com)이나 @@ 같은 경우는 제외
MENTION_PATTERN = re.compile(r"(?<![\w@])@([A-Za-z0-9_][A-Za-z0-9_.\-]*)")


def extract_login_ids(text: str | None) -> list[str]:
    """본문에서 멘션된 로그인 ID 추출 (등장 순서 유지, 중복 제거)

    Example::

        >>> extract_login_ids("@alice 확인 부탁드립니다. cc @bob.")
        ['alice', 'bob']
    """
    if not text:
        return []

    login_ids: list[str] = []
    seen: set[str] = set()
    for match in MENTION_PATTERN.finditer(text):
        # 문장 끝 마침표 등은 로그인 ID에 포함하지 않음
        login_id = match.group(1).rstrip(".-")
        key = login_id.lower()
        if login_id and key not in seen:
            seen.add(key)
            login_ids.append(login_id)
    return login_ids
