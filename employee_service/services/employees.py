from collections.abc import Mapping
from typing import Any

from employee_service.core.errors import NotFound, ValidationFailed
from employee_service.repositories.employees import EmployeeRepository
from employee_service.schemas.employee import (
    EmployeeRead,
    Invalid,
    Valid,
    new_employee_document,
    parse_employee_id,
    utcnow,
    validate_employee_changes,
    validate_new_employee,
)


class EmployeeService:
    """
    Employee 리소스의 다섯 가지 동작 (목록, 단건 조회, 생성, 수정, 삭제).

    요청 간에 상태를 갖지 않는다. 저장소는 생성자로 주입받는다.
    각 변경 동작은 저장소를 정확히 한 번만 호출하고 재시도하지 않는다.
    """

    def __init__(self, repository: EmployeeRepository) -> None:
        self._repository = repository

    async def list_employees(self) -> list[EmployeeRead]:
        docs = await self._repository.list_newest_first()
        return [EmployeeRead.from_document(doc) for doc in docs]

    async def get_employee(self, raw_id: str) -> EmployeeRead:
        employee_id = parse_employee_id(raw_id)
        doc = await self._repository.get(employee_id)
        if doc is None:
            raise NotFound(raw_id)
        return EmployeeRead.from_document(doc)

    async def create_employee(self, candidate: Mapping[str, Any]) -> EmployeeRead:
        match validate_new_employee(candidate):
            case Invalid(errors=errors):
                raise ValidationFailed(errors)
            case Valid(fields=fields):
                document = new_employee_document(fields, utcnow())

        saved = await self._repository.insert(document)
        return EmployeeRead.from_document(saved)

    async def update_employee(
        self, raw_id: str, candidate: Mapping[str, Any]
    ) -> EmployeeRead:
        employee_id = parse_employee_id(raw_id)

        # 저장소를 건드리기 전에 검증
        match validate_employee_changes(candidate):
            case Invalid(errors=errors):
                raise ValidationFailed(errors)
            case Valid(fields=changes):
                pass

        doc = await self._repository.update(employee_id, changes, utcnow())
        if doc is None:
            raise NotFound(raw_id)
        return EmployeeRead.from_document(doc)

    async def delete_employee(self, raw_id: str) -> EmployeeRead:
        employee_id = parse_employee_id(raw_id)
        doc = await self._repository.delete(employee_id)
        if doc is None:
            raise NotFound(raw_id)
        return EmployeeRead.from_document(doc)
