from fastapi import Depends, Request

from employee_service.core.errors import InfrastructureFault
from employee_service.repositories.employees import EmployeeRepository
from employee_service.services.employees import EmployeeService


def get_employee_repository(request: Request) -> EmployeeRepository:
    """
    lifespan에서 만들어 둔 저장소를 꺼낸다.
    테스트에서는 app.dependency_overrides로 교체한다.
    """
    repository = getattr(request.app.state, "employee_repository", None)
    if repository is None:
        raise InfrastructureFault("Database connection is not initialized")
    return repository


def get_employee_service(
    repository: EmployeeRepository = Depends(get_employee_repository),
) -> EmployeeService:
    return EmployeeService(repository)
