from pydantic import BaseModel, ConfigDict, TypeAdapter
from typing import List

# ✅ 폼/테이블/요청 본문에서 공통으로 쓰는 필드 순서
STUDENT_FIELDS = ("register_number", "name", "department", "year", "phone", "email")


# ✅ 학생 레코드 (POST/PUT 본문, GET 목록의 원소)
class StudentRecord(BaseModel):
    register_number: str                     # 학번 (고유 식별자)
    name: str = ""                           # 이름
    department: str = ""                     # 학과
    year: str = ""                           # 학년
    phone: str = ""                          # 연락처
    email: str = ""                          # 이메일

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",                # 서버가 추가로 내려주는 키는 무시
        coerce_numbers_to_str=True,    # year: 2 처럼 숫자로 와도 문자열로 취급
    )

    def as_row(self) -> tuple:
        """테이블 한 줄 (STUDENT_FIELDS 순서)"""
        return tuple(getattr(self, f) for f in STUDENT_FIELDS)


# ✅ GET /api/students 응답 본문 검증용
StudentList = TypeAdapter(List[StudentRecord])
