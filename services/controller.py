# services/controller.py

"""
학생 관리 클라이언트 컨트롤러

- 화면 전환, 폼 입력, REST 호출, 목록 재조회를 담당
- 상태 변경은 state_reducers의 순수 함수로 새 AppState를 만든 뒤 _commit()으로 반영
- 변경 후에는 등록된 리스너(렌더러)에게 새 상태를 전달
- 변경 작업(추가/수정/삭제) 후 일관성은 "전체 목록 재조회"로 맞춤 (로컬 패치 없음)
"""

import logging
from typing import Callable, Iterable, List, Optional, Protocol

from config.settings import settings
from schemas.app_state import AppState, REFRESHING_VIEWS, View
from schemas.common import ErrorDetail, Messages
from schemas.students import StudentRecord
from services import state_reducers as reducers
from services.student_client import (
    StudentAPIClient,
    StudentAPIDecodeError,
    StudentAPIError,
    StudentAPIStatusError,
)

logger = logging.getLogger(__name__)

Listener = Callable[[AppState], None]


class Notifier(Protocol):
    """사용자 알림 포트 (alert / confirm)"""

    def alert(self, message: str) -> None: ...

    async def confirm(self, message: str) -> bool: ...


def find_student(students: Iterable[StudentRecord], register_number: str) -> Optional[StudentRecord]:
    """전체 목록에서 학번이 정확히 일치하는 첫 학생 (선형 탐색)"""
    return next((s for s in students if s.register_number == register_number), None)


def to_error_detail(exc: StudentAPIError) -> ErrorDetail:
    if isinstance(exc, StudentAPIStatusError):
        return ErrorDetail(code="SERVER_ERROR", message=exc.text, status_code=exc.status_code)
    if isinstance(exc, StudentAPIDecodeError):
        return ErrorDetail(code="INVALID_RESPONSE", message=str(exc))
    return ErrorDetail(code="CONNECTION_FAILED", message=str(exc))


class ClientController:

    def __init__(
        self,
        notifier: Notifier,
        client: Optional[StudentAPIClient] = None,
        *,
        stale_response_policy: Optional[str] = None,
        delete_refresh: Optional[str] = None,
        surface_fetch_errors: Optional[bool] = None,
    ):
        self.notifier = notifier
        self.client = client or StudentAPIClient()
        self.stale_response_policy = stale_response_policy or settings.STALE_RESPONSE_POLICY
        self.delete_refresh = delete_refresh or settings.DELETE_REFRESH
        self.surface_fetch_errors = (
            settings.SURFACE_FETCH_ERRORS if surface_fetch_errors is None else surface_fetch_errors
        )
        self.state: AppState = reducers.initial_state()
        self._listeners: List[Listener] = []
        self._seq = 0
        # 이 순번 이하의 목록 응답은 새로고침 이전 요청이므로 무시
        self._reload_floor = 0

    async def __aenter__(self) -> "ClientController":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.client.aclose()

    # ===============================================================
    # 상태 반영 / 구독
    # ===============================================================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _commit(self, new_state: AppState) -> None:
        self.state = new_state
        for listener in list(self._listeners):
            listener(new_state)

    def _fail(self, exc: StudentAPIError) -> None:
        self._commit(reducers.record_error(self.state, to_error_detail(exc)))

    # ===============================================================
    # 목록 조회 공통
    # ===============================================================

    def _next_seq(self) -> int:
        # 순번은 요청을 보내기 전에 발급 (응답 도착 순서와 무관)
        self._seq += 1
        return self._seq

    def _abandoned(self, seq: int) -> bool:
        """새로고침 이전에 보낸 요청인지 (응답/실패 모두 화면에 반영하지 않음)"""
        if seq <= self._reload_floor:
            logger.debug("새로고침 이전 목록 응답 무시 (seq=%d)", seq)
            return True
        return False

    def _reconcile(self, seq: int, students: List[StudentRecord]) -> None:
        """목록 응답을 테이블/대시보드에 반영 (정책에 따라 오래된 응답은 버림)"""
        if self._abandoned(seq):
            return
        if self.stale_response_policy == "last_issued" and seq < self.state.loaded_seq:
            logger.debug("오래된 목록 응답 무시 (seq=%d < %d)", seq, self.state.loaded_seq)
            return
        self._commit(reducers.apply_student_list(self.state, students, seq))

    # ===============================================================
    # 화면 전환
    # ===============================================================

    async def start(self) -> None:
        """최초 로딩: 화면이 열리자마자 목록 조회"""
        await self.fetch_students()

    async def navigate(self, target: View) -> None:
        target = View(target)
        self._commit(reducers.navigate(self.state, target))
        if target in REFRESHING_VIEWS:
            await self.fetch_students()

    async def refresh(self) -> None:
        await self.fetch_students()

    async def reload(self) -> None:
        """페이지 새로고침과 동일: 진행 중 응답은 버리고 상태 초기화 후 재조회"""
        self._reload_floor = self._seq
        self._commit(reducers.initial_state())
        await self.fetch_students()

    # ===============================================================
    # [READ] 전체 조회
    # ===============================================================

    async def fetch_students(self) -> None:
        seq = self._next_seq()
        try:
            students = await self.client.list_students()
        except StudentAPIError as e:
            if self._abandoned(seq):
                return
            # 목록 조회 실패는 기본적으로 로그만 남기고 기존 화면 유지
            logger.error("Failed to fetch students: %s", e)
            self._fail(e)
            if self.surface_fetch_errors:
                self.notifier.alert(Messages.FETCH_FAILED)
            return
        self._reconcile(seq, students)

    # ===============================================================
    # [CREATE] 학생 추가
    # ===============================================================

    def set_create_field(self, name: str, value: str) -> None:
        self._commit(reducers.set_create_field(self.state, name, value))

    async def submit_create(self) -> None:
        student = self.state.create_form.to_record()
        try:
            await self.client.create_student(student)
        except StudentAPIStatusError as e:
            logger.warning("학생 추가 실패 (HTTP %d): %s", e.status_code, e.text)
            self._fail(e)
            self.notifier.alert(Messages.server_error(e.text))
            return
        except StudentAPIError as e:
            self._fail(e)
            self.notifier.alert(Messages.CONNECT_FAILED)
            return

        logger.info("학생 추가 완료: %s", student.register_number)
        self.notifier.alert(Messages.STUDENT_ADDED)
        self._commit(reducers.reset_create_form(self.state))
        await self.fetch_students()

    # ===============================================================
    # [UPDATE] 학번 조회 → 폼 채우기 → 수정
    # ===============================================================

    def set_search_reg(self, value: str) -> None:
        self._commit(reducers.set_search_reg(self.state, value))

    def set_update_field(self, name: str, value: str) -> None:
        self._commit(reducers.set_update_field(self.state, name, value))

    async def search_student(self) -> None:
        reg = self.state.update_view.search_reg.strip()
        if not reg:
            self.notifier.alert(Messages.ENTER_REGISTER_NUMBER)
            return

        seq = self._next_seq()
        try:
            students = await self.client.list_students()
        except StudentAPIError as e:
            if self._abandoned(seq):
                return
            logger.error("학생 조회 실패: %s", e)
            self._fail(e)
            self.notifier.alert(Messages.CONNECT_FAILED)
            return

        if self._abandoned(seq):
            return
        self._reconcile(seq, students)
        student = find_student(students, reg)
        if student is not None:
            self._commit(reducers.fill_update_form(self.state, student))
        else:
            self.notifier.alert(Messages.not_found(reg))
            miss = ErrorDetail(code="NOT_FOUND", message=Messages.not_found(reg))
            self._commit(reducers.record_error(reducers.hide_update_form(self.state), miss))

    def cancel_update(self) -> None:
        self._commit(reducers.cancel_update(self.state))

    async def submit_update(self) -> None:
        student = self.state.update_view.form.to_record()
        try:
            await self.client.update_student(student)
        except StudentAPIStatusError as e:
            logger.warning("학생 수정 실패 (HTTP %d): %s", e.status_code, e.text)
            self._fail(e)
            self.notifier.alert(Messages.server_error(e.text))
            return
        except StudentAPIError as e:
            self._fail(e)
            self.notifier.alert(Messages.CONNECT_FAILED)
            return

        logger.info("학생 수정 완료: %s", student.register_number)
        self.notifier.alert(Messages.STUDENT_UPDATED)
        self._commit(reducers.cancel_update(self.state))
        await self.fetch_students()

    async def edit_student(self, register_number: str) -> None:
        """테이블의 Edit 버튼: 수정 화면으로 이동 후 조회/폼 채우기"""
        state = reducers.navigate(self.state, View.UPDATE_STUDENT)
        self._commit(reducers.set_search_reg(state, register_number))

        seq = self._next_seq()
        try:
            students = await self.client.list_students()
        except StudentAPIError as e:
            if self._abandoned(seq):
                return
            logger.error("학생 정보 로딩 실패: %s", e)
            self._fail(e)
            self.notifier.alert(Messages.EDIT_LOAD_FAILED)
            return

        if self._abandoned(seq):
            return
        self._reconcile(seq, students)
        student = find_student(students, register_number)
        if student is not None:
            self._commit(reducers.fill_update_form(self.state, student))

    # ===============================================================
    # [DELETE] 학생 삭제
    # ===============================================================

    async def delete_student(self, register_number: str) -> None:
        if not await self.notifier.confirm(Messages.confirm_delete(register_number)):
            return

        try:
            await self.client.delete_student(register_number)
        except StudentAPIStatusError as e:
            logger.warning("학생 삭제 실패 (HTTP %d): %s", e.status_code, e.text)
            self._fail(e)
            self.notifier.alert(Messages.DELETE_FAILED)
            return
        except StudentAPIError as e:
            self._fail(e)
            self.notifier.alert(Messages.DELETE_CONNECT_FAILED)
            return

        logger.info("학생 삭제 완료: %s", register_number)
        self.notifier.alert(Messages.STUDENT_DELETED)
        if self.delete_refresh == "reload":
            await self.reload()
        else:
            await self.fetch_students()
