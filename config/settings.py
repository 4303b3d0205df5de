"""
config/settings.py

- .env에 정의한 환경변수를 읽어 클라이언트 전역 설정으로 제공합니다.
- pydantic v2 / pydantic-settings v2 사용.
- 학생 API 주소는 베이스 URL + 경로(STUDENTS_API_PATH)로부터 동적으로 구성합니다(@computed_field).
"""

from typing import Literal, Optional
from pydantic import field_validator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # =========================
    # 앱/런타임
    # =========================
    APP_TITLE: str = "Student Desk"

    # =========================
    # Student API (서버 협력자)
    # =========================
    STUDENTS_API_BASE_URL: str = "http://localhost:8080"
    STUDENTS_API_PATH: str = "/api/students"

    # 미설정(None)이면 타임아웃 없음 → 응답이 올 때까지 대기
    STUDENTS_API_TIMEOUT: Optional[float] = None

    @field_validator("STUDENTS_API_BASE_URL", mode="before")
    @classmethod
    def _strip_base_url(cls, v):
        if isinstance(v, str):
            # "http://host:8080/" → "http://host:8080"
            return v.strip().rstrip("/")
        return v

    @field_validator("STUDENTS_API_TIMEOUT", mode="before")
    @classmethod
    def _empty_timeout(cls, v):
        # .env에 "STUDENTS_API_TIMEOUT=" 처럼 빈 값이면 타임아웃 없음으로 처리
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @computed_field  # type: ignore[misc]
    @property
    def STUDENTS_API_URL(self) -> str:
        """
        학생 엔드포인트 전체 URL.
        예: http://localhost:8080/api/students
        """
        return f"{self.STUDENTS_API_BASE_URL}{self.STUDENTS_API_PATH}"

    # =========================
    # 동작 정책
    # =========================
    # last_resolved: 마지막에 도착한 목록 응답이 화면을 덮어씀 (기존 동작)
    # last_issued  : 나중에 보낸 요청보다 오래된 응답은 버림
    STALE_RESPONSE_POLICY: Literal["last_resolved", "last_issued"] = "last_resolved"

    # reload : 삭제 성공 시 전체 상태 초기화 후 재조회 (페이지 새로고침과 동일)
    # refetch: 현재 화면을 유지한 채 목록만 재조회
    DELETE_REFRESH: Literal["reload", "refetch"] = "reload"

    # 목록 조회 실패를 사용자에게 알릴지 여부 (기본: 로그만 남김)
    SURFACE_FETCH_ERRORS: bool = False

    # =========================
    # Logging / Misc
    # =========================
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # =========================
    # BaseSettings Config
    # =========================
    model_config = SettingsConfigDict(
        env_file=".env",               # .env에서 값 로드
        env_file_encoding="utf-8",
        case_sensitive=False,          # 환경변수 대소문자 비구분
        extra="ignore",                # 정의되지 않은 키는 무시
    )


# ✅ settings 객체를 통해 어디서든 접근 가능
settings = Settings()
