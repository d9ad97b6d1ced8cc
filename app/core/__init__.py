"""Core 모듈

설정(config), DB 세션(database), 예외/에러 응답(exceptions), 로깅(logging),
공통 의존성(dependencies), 마이그레이션(migration)을 제공합니다.
"""
