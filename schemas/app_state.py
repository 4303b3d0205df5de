"""
schemas/app_state.py

- 클라이언트 화면 상태를 하나의 불변 객체로 표현
- 화면(View)마다 타입이 있는 필드 하나씩: dashboard / student_list / create_form / update_view
- 상태 변경은 services/state_reducers.py의 순수 함수로만 수행 (model_copy로 새 객체 생성)
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from schemas.common import ErrorDetail
from schemas.students import StudentRecord


class View(str, Enum):
    DASHBOARD = "dashboard"
    STUDENT_LIST = "view-students"
    ADD_STUDENT = "add-student"
    UPDATE_STUDENT = "update-student"

    @property
    def label(self) -> str:
        """네비게이션 버튼 라벨 = 페이지 제목"""
        return VIEW_LABELS[self]


VIEW_LABELS = {
    View.DASHBOARD: "Dashboard",
    View.STUDENT_LIST: "View Students",
    View.ADD_STUDENT: "Add Student",
    View.UPDATE_STUDENT: "Update Student",
}

# 활성화될 때 목록을 다시 불러오는 화면
REFRESHING_VIEWS = frozenset({View.DASHBOARD, View.STUDENT_LIST})


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ✅ 입력 폼 (추가/수정 공용, 6개 텍스트 필드)
class StudentForm(_Frozen):
    register_number: str = ""
    name: str = ""
    department: str = ""
    year: str = ""
    phone: str = ""
    email: str = ""

    def to_record(self) -> StudentRecord:
        return StudentRecord(**self.model_dump())

    @classmethod
    def from_record(cls, record: StudentRecord) -> "StudentForm":
        return cls(**record.model_dump())


class DashboardView(_Frozen):
    total_count: int = 0


class StudentListView(_Frozen):
    rows: Tuple[StudentRecord, ...] = ()


class UpdateView(_Frozen):
    search_reg: str = ""                          # 학번 검색 입력칸
    form: StudentForm = Field(default_factory=StudentForm)
    form_visible: bool = False


class AppState(_Frozen):
    active_view: View = View.DASHBOARD
    page_title: str = VIEW_LABELS[View.DASHBOARD]
    dashboard: DashboardView = Field(default_factory=DashboardView)
    student_list: StudentListView = Field(default_factory=StudentListView)
    create_form: StudentForm = Field(default_factory=StudentForm)
    update_view: UpdateView = Field(default_factory=UpdateView)
    last_error: Optional[ErrorDetail] = None      # 가장 최근 실패 (목록 조회 성공 시 초기화)
    loaded_seq: int = 0                           # 현재 화면에 반영된 목록 응답의 순번
