from typing import List, Optional

from pydantic import BaseModel

from employee_service.schemas.employee import EmployeeRead


class EmployeeListResponse(BaseModel):
    success: bool = True
    count: int
    data: List[EmployeeRead]


class EmployeeResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: EmployeeRead


class HealthResponse(BaseModel):
    success: bool = True
    message: str
    timestamp: str
