# services/state_reducers.py
#
# 화면 상태 전이 함수 모음
# - 모든 함수는 (state, ...) -> 새 state 형태의 순수 함수
# - 입력 state는 절대 변경하지 않음 (AppState는 frozen)

from typing import Iterable

from schemas.app_state import AppState, StudentForm, View
from schemas.common import ErrorDetail
from schemas.students import STUDENT_FIELDS, StudentRecord


def initial_state() -> AppState:
    return AppState()


# ==========================================================
# [네비게이션]
# ==========================================================

def navigate(state: AppState, target: View) -> AppState:
    """활성 화면을 target 하나로 전환하고 제목을 버튼 라벨로 변경"""
    target = View(target)
    return state.model_copy(update={"active_view": target, "page_title": target.label})


# ==========================================================
# [목록 / 대시보드]
# ==========================================================

def apply_student_list(state: AppState, students: Iterable[StudentRecord], seq: int = 0) -> AppState:
    """조회한 전체 목록으로 테이블과 총 인원 수를 교체"""
    rows = tuple(students)
    return state.model_copy(update={
        "student_list": state.student_list.model_copy(update={"rows": rows}),
        "dashboard": state.dashboard.model_copy(update={"total_count": len(rows)}),
        "last_error": None,
        "loaded_seq": max(seq, state.loaded_seq),
    })


def record_error(state: AppState, error: ErrorDetail) -> AppState:
    return state.model_copy(update={"last_error": error})


# ==========================================================
# [추가 폼]
# ==========================================================

def _check_field(name: str) -> None:
    if name not in STUDENT_FIELDS:
        raise ValueError(f"알 수 없는 필드: {name}")


def set_create_field(state: AppState, name: str, value: str) -> AppState:
    _check_field(name)
    form = state.create_form.model_copy(update={name: value})
    return state.model_copy(update={"create_form": form})


def reset_create_form(state: AppState) -> AppState:
    return state.model_copy(update={"create_form": StudentForm()})


# ==========================================================
# [수정 화면]
# ==========================================================

def _with_update_view(state: AppState, **changes) -> AppState:
    return state.model_copy(update={"update_view": state.update_view.model_copy(update=changes)})


def set_search_reg(state: AppState, value: str) -> AppState:
    return _with_update_view(state, search_reg=value)


def set_update_field(state: AppState, name: str, value: str) -> AppState:
    _check_field(name)
    form = state.update_view.form.model_copy(update={name: value})
    return _with_update_view(state, form=form)


def fill_update_form(state: AppState, record: StudentRecord) -> AppState:
    """찾은 학생 정보로 수정 폼을 채우고 표시"""
    return _with_update_view(state, form=StudentForm.from_record(record), form_visible=True)


def hide_update_form(state: AppState) -> AppState:
    """폼만 숨김 (필드 값은 그대로 유지)"""
    return _with_update_view(state, form_visible=False)


def cancel_update(state: AppState) -> AppState:
    return _with_update_view(state, form_visible=False, search_reg="")
