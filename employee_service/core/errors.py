"""
Employee Service 에러 분류.

- ValidationFailed: 필드 제약 위반 (위반 항목 전부)
- MalformedId: ObjectId 형식이 아닌 id
- NotFound: 형식은 맞지만 해당 문서 없음
- InfrastructureFault: 그 밖의 MongoDB 오류

HTTP 응답으로의 변환은 api/error_handlers.py에서 한다.
"""


class EmployeeServiceError(Exception):
    pass


class ValidationFailed(EmployeeServiceError):
    def __init__(self, errors: list[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = list(errors)


class MalformedId(EmployeeServiceError):
    def __init__(self, raw_id: str) -> None:
        super().__init__(f"Malformed employee id: {raw_id!r}")
        self.raw_id = raw_id


class NotFound(EmployeeServiceError):
    def __init__(self, employee_id: str) -> None:
        super().__init__(f"Employee {employee_id} not found")
        self.employee_id = employee_id


class InfrastructureFault(EmployeeServiceError):
    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail
