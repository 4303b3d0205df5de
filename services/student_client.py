import logging
from typing import Any, List, Optional

import httpx
from pydantic import ValidationError

from config.settings import settings
from middlewares.timing import timing_hooks
from schemas.students import StudentList, StudentRecord

logger = logging.getLogger(__name__)


class StudentAPIError(Exception):
    """학생 API 연동 관련 예외"""
    pass


class StudentAPIConnectionError(StudentAPIError):
    """전송 계층 실패 (연결 불가, 타임아웃, 본문 디코딩 실패 등)"""
    pass


class StudentAPIStatusError(StudentAPIError):
    """2xx가 아닌 응답 - 서버가 보낸 본문 텍스트를 그대로 보관"""

    def __init__(self, status_code: int, text: str):
        super().__init__(f"학생 API 오류 (HTTP {status_code}): {text}")
        self.status_code = status_code
        self.text = text


class StudentAPIDecodeError(StudentAPIError):
    """2xx 응답이지만 본문이 학생 목록 형식이 아님"""
    pass


class StudentAPIClient:
    """학생 CRUD REST 클라이언트 (GET/POST/PUT/DELETE /api/students)"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        path: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.STUDENTS_API_BASE_URL).rstrip("/")
        self.path = path or settings.STUDENTS_API_PATH
        self.timeout = timeout if timeout is not None else settings.STUDENTS_API_TIMEOUT
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    # ===============================================================
    # 연결 관리
    # ===============================================================

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),   # None이면 무제한 대기
                transport=self._transport,
                event_hooks=timing_hooks(),
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "StudentAPIClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _make_request(self, method: str, **kwargs) -> httpx.Response:
        """공통 HTTP 요청 처리 - 실패는 StudentAPIError 계열로 변환

        RequestError: 연결/타임아웃뿐 아니라 본문 디코딩 실패, 리다이렉트 초과 포함
        """
        try:
            response = await self._get_client().request(method, self.path, **kwargs)
        except httpx.RequestError as e:
            logger.warning("학생 API 연결 실패: %s %s (%s)", method, self.path, e)
            raise StudentAPIConnectionError(f"학생 API 연결 실패: {e}") from e

        if not response.is_success:
            raise StudentAPIStatusError(response.status_code, response.text)
        return response

    # ===============================================================
    # CRUD
    # ===============================================================

    async def list_students(self) -> List[StudentRecord]:
        """전체 학생 목록 조회"""
        response = await self._make_request("GET")
        try:
            payload: Any = response.json()
            return StudentList.validate_python(payload)
        except (ValueError, ValidationError) as e:
            raise StudentAPIDecodeError(f"학생 목록 형식 오류: {e}") from e

    async def create_student(self, student: StudentRecord) -> None:
        """학생 추가"""
        await self._make_request("POST", json=student.model_dump())

    async def update_student(self, student: StudentRecord) -> None:
        """학생 정보 전체 교체 (register_number 기준)"""
        await self._make_request("PUT", json=student.model_dump())

    async def delete_student(self, register_number: str) -> None:
        """학생 삭제 (?id=학번)"""
        await self._make_request("DELETE", params={"id": register_number})
