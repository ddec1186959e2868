"""Root conftest: app wired to an in-memory repository."""

import os

# 테스트 중 실제 .env / 프론트엔드 빌드를 읽지 않도록
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("STATIC_DIR", "__no_static_dir__")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from employee_service.core.config import Settings  # noqa: E402
from employee_service.core.deps import get_employee_repository  # noqa: E402
from employee_service.main import create_app  # noqa: E402
from tests.fakes import InMemoryEmployeeRepository  # noqa: E402

EMPLOYEES_URL = "/api/employees"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        APP_ENV="production",
        STATIC_DIR=str(tmp_path / "missing"),
    )


@pytest.fixture
def repository() -> InMemoryEmployeeRepository:
    return InMemoryEmployeeRepository()


@pytest.fixture
def app(settings, repository):
    app = create_app(settings)
    app.dependency_overrides[get_employee_repository] = lambda: repository
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(app):
    """HTTP client against the app (lifespan is not run, so no MongoDB)."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def ann() -> dict:
    return {
        "name": "Ann",
        "position": "Engineer",
        "department": "R&D",
        "salary": 90000,
    }
