# tests/conftest.py
#
# 인메모리 FastAPI 서버(/api/students)를 httpx.ASGITransport로 연결해
# 실제 HTTP 왕복과 동일한 경로로 클라이언트/컨트롤러를 검증

from typing import Dict, List

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from schemas.students import StudentRecord
from services.controller import ClientController
from services.student_client import StudentAPIClient

BASE_URL = "http://testserver"

ASHA = {
    "register_number": "R100",
    "name": "Asha",
    "department": "CSE",
    "year": "2",
    "phone": "555",
    "email": "a@x.com",
}

RAVI = {
    "register_number": "R200",
    "name": "Ravi",
    "department": "ECE",
    "year": "3",
    "phone": "777",
    "email": "r@x.com",
}


def create_fake_server() -> FastAPI:
    app = FastAPI()
    store: Dict[str, dict] = {}
    app.state.store = store

    @app.get("/api/students")
    def list_students() -> List[dict]:
        return list(store.values())

    @app.post("/api/students", status_code=201)
    def create_student(student: StudentRecord):
        if student.register_number in store:
            return PlainTextResponse("Student already exists", status_code=409)
        store[student.register_number] = student.model_dump()
        return {"message": "Student created"}

    @app.put("/api/students")
    def update_student(student: StudentRecord):
        if student.register_number not in store:
            return PlainTextResponse("Student not found", status_code=404)
        store[student.register_number] = student.model_dump()
        return {"message": "Student updated"}

    @app.delete("/api/students")
    def delete_student(id: str):
        if store.pop(id, None) is None:
            return PlainTextResponse("Student not found", status_code=404)
        return {"message": "Student deleted"}

    return app


class RecordingNotifier:
    """alert/confirm 호출을 기록하는 테스트용 알림 포트"""

    def __init__(self, answer: bool = True):
        self.answer = answer
        self.alerts: List[str] = []
        self.confirms: List[str] = []

    def alert(self, message: str) -> None:
        self.alerts.append(message)

    async def confirm(self, message: str) -> bool:
        self.confirms.append(message)
        return self.answer


def refused_transport() -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    return httpx.MockTransport(handler)


def timeout_transport() -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    return httpx.MockTransport(handler)


def garbled_gzip_transport() -> httpx.MockTransport:
    """Content-Encoding은 gzip인데 본문은 gzip이 아닌 응답"""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            headers={"Content-Encoding": "gzip"},
            stream=httpx.ByteStream(b"not gzip"),
        )

    return httpx.MockTransport(handler)


@pytest.fixture
def fake_server():
    return create_fake_server()


@pytest.fixture
def store(fake_server):
    return fake_server.state.store


@pytest_asyncio.fixture
async def api_client(fake_server):
    client = StudentAPIClient(base_url=BASE_URL, transport=httpx.ASGITransport(app=fake_server))
    yield client
    await client.aclose()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def make_controller(notifier):
    def _make(client, **overrides):
        options = {
            "stale_response_policy": "last_resolved",
            "delete_refresh": "reload",
            "surface_fetch_errors": False,
        }
        options.update(overrides)
        return ClientController(notifier, client, **options)

    return _make


@pytest.fixture
def controller(api_client, make_controller):
    return make_controller(api_client)
