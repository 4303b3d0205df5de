"""
schemas/common.py

- 프로젝트 전반에서 재사용할 공용 스키마 모음
- Pydantic v2 기준
- 포함 내용:
  1) 에러 코드/상세: ErrorCode, ErrorDetail
  2) 사용자 알림 문구 모음: Messages
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, Field, ConfigDict


# =========================================================
# 1) 에러 상세
# =========================================================

ErrorCode = Literal[
    "CONNECTION_FAILED",   # 전송 계층 실패 (연결 거부, 타임아웃 등)
    "SERVER_ERROR",        # 2xx가 아닌 응답
    "INVALID_RESPONSE",    # 2xx지만 본문이 학생 목록이 아님
    "NOT_FOUND",           # 조회 시 학번 불일치
]


class ErrorDetail(BaseModel):
    """에러 코드/메시지를 담는 최소 단위"""
    code: ErrorCode = Field(..., description="에러 식별 코드 (예: CONNECTION_FAILED)")
    message: str = Field(..., description="사람이 읽을 수 있는 에러 메시지")
    status_code: Optional[int] = Field(default=None, description="HTTP 상태 코드 (있을 때만)")
    occurred_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="발생 시각 (UTC)"
    )

    model_config = ConfigDict(frozen=True, extra="ignore")


# =========================================================
# 2) 사용자 알림 문구
# =========================================================

class Messages:
    STUDENT_ADDED = "Student added successfully!"
    STUDENT_UPDATED = "Student updated successfully!"
    STUDENT_DELETED = "Student deleted successfully"
    CONNECT_FAILED = "Failed to connect to server"
    DELETE_CONNECT_FAILED = "Error connecting to server"
    DELETE_FAILED = "Failed to delete student"
    FETCH_FAILED = "Failed to fetch students"
    EDIT_LOAD_FAILED = "Failed to load student data"
    ENTER_REGISTER_NUMBER = "Please enter a register number"

    @staticmethod
    def server_error(text: str) -> str:
        return f"Error: {text}"

    @staticmethod
    def not_found(register_number: str) -> str:
        return f"Student not found with register number: {register_number}"

    @staticmethod
    def confirm_delete(register_number: str) -> str:
        return f"Are you sure you want to delete student {register_number}?"
