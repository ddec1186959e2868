"""
Employee 엔티티의 스키마와 검증 규칙.

- EmployeeCreate / EmployeeUpdate: 요청 바디 스키마 (id, createdAt 등은 무시)
- validate_new_employee / validate_employee_changes: ValidationError를
  필드별 메시지 목록으로 바꿔서 Valid | Invalid로 돌려주는 순수 함수
- EmployeeRead: 응답용 스키마
"""
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Annotated, Any, Optional, Union

from bson import ObjectId
from pydantic import (
    BaseModel,
    Field,
    StringConstraints,
    ValidationError,
    field_validator,
)

from employee_service.core.errors import MalformedId

TEXT_FIELDS = ("name", "position", "department")
EMPLOYEE_FIELDS = TEXT_FIELDS + ("salary",)

RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
Salary = Annotated[float, Field(ge=0, allow_inf_nan=False)]


def _reject_bool(value: Any) -> Any:
    # bool은 int의 하위 타입이라 float로 그대로 통과되므로 직접 막는다
    if isinstance(value, bool):
        raise ValueError("salary must be a number")
    return value


class EmployeeCreate(BaseModel):
    """POST /employees 요청 바디"""

    name: RequiredText
    position: RequiredText
    department: RequiredText
    salary: Salary

    @field_validator("salary", mode="before")
    @classmethod
    def salary_not_bool(cls, v: Any) -> Any:
        return _reject_bool(v)


class EmployeeUpdate(BaseModel):
    """PUT /employees/{id} 요청 바디

    보내지 않은 필드는 그대로 두고, 보낸 필드는 생성 때와 같은 규칙으로 검사한다.
    명시적인 null은 필수 필드를 비우는 것이므로 에러.
    """

    name: Optional[RequiredText] = None
    position: Optional[RequiredText] = None
    department: Optional[RequiredText] = None
    salary: Optional[Salary] = None

    @field_validator(*EMPLOYEE_FIELDS, mode="before")
    @classmethod
    def not_null(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("field is required")
        return v

    @field_validator("salary", mode="before")
    @classmethod
    def salary_not_bool(cls, v: Any) -> Any:
        return _reject_bool(v)

    def changes(self) -> dict[str, Any]:
        return self.model_dump(include=self.model_fields_set)


class EmployeeRead(BaseModel):
    """응답용 스키마"""

    id: str
    name: str
    position: str
    department: str
    salary: float
    createdAt: datetime
    updatedAt: datetime

    @field_validator("createdAt", "updatedAt")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @classmethod
    def from_document(cls, raw: Mapping[str, Any]) -> "EmployeeRead":
        """
        MongoDB Document(dict) -> Pydantic 모델로 변환.
        _id(ObjectId)는 문자열 id로 바꿔서 내보낸다.
        """
        data = dict(raw)
        data["id"] = str(data.pop("_id"))
        return cls(**data)


@dataclass(frozen=True)
class Valid:
    fields: dict[str, Any]


@dataclass(frozen=True)
class Invalid:
    errors: list[str]


ValidationResult = Union[Valid, Invalid]


def _message_for(error: Mapping[str, Any]) -> str:
    field = str(error["loc"][0])
    missing = error["type"] == "missing" or error.get("input") is None

    if field == "salary":
        if missing:
            return "Employee salary is required"
        if error["type"] == "greater_than_equal":
            return "Salary cannot be negative"
        return "Salary must be a valid number"

    if missing or error["type"] == "string_too_short":
        return f"Employee {field} is required"
    return f"Employee {field} must be a string"


def _collect_errors(exc: ValidationError) -> list[str]:
    messages: list[str] = []
    for error in exc.errors():
        message = _message_for(error)
        if message not in messages:
            messages.append(message)
    return messages


def validate_new_employee(candidate: Mapping[str, Any]) -> ValidationResult:
    """
    생성용 검증. 위반된 제약을 첫 번째만이 아니라 전부 돌려준다.
    """
    try:
        employee = EmployeeCreate.model_validate(dict(candidate))
    except ValidationError as exc:
        return Invalid(_collect_errors(exc))
    return Valid(employee.model_dump())


def validate_employee_changes(candidate: Mapping[str, Any]) -> ValidationResult:
    """수정용 검증. 바디에 들어온 필드만 검사하고 그 필드만 돌려준다."""
    try:
        update = EmployeeUpdate.model_validate(dict(candidate))
    except ValidationError as exc:
        return Invalid(_collect_errors(exc))
    return Valid(update.changes())


def utcnow() -> datetime:
    # MongoDB는 밀리초까지만 저장하므로 미리 잘라둔다
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond - now.microsecond % 1000)


def new_employee_document(fields: Mapping[str, Any], now: datetime) -> dict[str, Any]:
    return {
        **{key: fields[key] for key in EMPLOYEE_FIELDS},
        "createdAt": now,
        "updatedAt": now,
    }


def parse_employee_id(raw_id: str) -> ObjectId:
    if not ObjectId.is_valid(raw_id):
        raise MalformedId(raw_id)
    return ObjectId(raw_id)
