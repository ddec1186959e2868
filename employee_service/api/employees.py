from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, status

from employee_service.core.deps import get_employee_service
from employee_service.schemas.envelope import EmployeeListResponse, EmployeeResponse
from employee_service.services.employees import EmployeeService

router = APIRouter(
    prefix="/employees",
    tags=["employees"],
)


@router.get(
    "",
    response_model=EmployeeListResponse,
)
async def list_employees(
    service: EmployeeService = Depends(get_employee_service),
):
    """
    전체 직원 목록 (createdAt 내림차순, 최신순)
    """
    employees = await service.list_employees()
    return EmployeeListResponse(count=len(employees), data=employees)


@router.get(
    "/{employee_id}",
    response_model=EmployeeResponse,
    response_model_exclude_none=True,
)
async def get_employee(
    employee_id: str,
    service: EmployeeService = Depends(get_employee_service),
):
    employee = await service.get_employee(employee_id)
    return EmployeeResponse(data=employee)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=EmployeeResponse,
)
async def create_employee(
    payload: Optional[Dict[str, Any]] = Body(None),
    service: EmployeeService = Depends(get_employee_service),
):
    """
    직원 생성. 바디의 id, createdAt, updatedAt은 무시한다.
    """
    employee = await service.create_employee(payload or {})
    return EmployeeResponse(message="Employee created successfully", data=employee)


@router.put(
    "/{employee_id}",
    response_model=EmployeeResponse,
)
async def update_employee(
    employee_id: str,
    payload: Optional[Dict[str, Any]] = Body(None),
    service: EmployeeService = Depends(get_employee_service),
):
    """
    부분 수정. 바디에 없는 필드는 그대로 유지.
    """
    employee = await service.update_employee(employee_id, payload or {})
    return EmployeeResponse(message="Employee updated successfully", data=employee)


@router.delete(
    "/{employee_id}",
    response_model=EmployeeResponse,
)
async def delete_employee(
    employee_id: str,
    service: EmployeeService = Depends(get_employee_service),
):
    # 삭제 확인용으로 삭제 직전 상태를 돌려준다
    employee = await service.delete_employee(employee_id)
    return EmployeeResponse(message="Employee deleted successfully", data=employee)
