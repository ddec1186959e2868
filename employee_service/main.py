import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from employee_service.api.employees import router as employees_router
from employee_service.api.error_handlers import register_error_handlers
from employee_service.api.frontend import FrontendStaticFiles
from employee_service.api.health import router as health_router
from employee_service.core import db
from employee_service.core.config import Settings, get_settings
from employee_service.core.logging import setup_logging
from employee_service.repositories.employees import MongoEmployeeRepository

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.LOG_LEVEL)
        # 연결 실패 시 예외가 올라가서 기동 자체가 중단된다
        client = await db.connect(settings)
        repository = MongoEmployeeRepository(db.get_collection(client, settings))
        await repository.ensure_indexes()

        app.state.mongo_client = client
        app.state.employee_repository = repository
        logger.info("API endpoints available under %s/", settings.API_PREFIX)
        yield
        logger.info("Shutting down Employee Service")
        client.close()

    app = FastAPI(
        title="Employee Service",
        version="0.1.0",
        description="Employee CRUD service (REST + MongoDB + Motor)",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    app.include_router(employees_router, prefix=settings.API_PREFIX)
    app.include_router(health_router, prefix=settings.API_PREFIX)

    register_error_handlers(app, settings)

    # API 라우터 뒤에 마운트해야 /api/* 가 우선한다
    if os.path.isdir(settings.STATIC_DIR):
        app.mount(
            "/",
            FrontendStaticFiles(
                directory=settings.STATIC_DIR,
                html=True,
                api_prefix=settings.API_PREFIX,
            ),
            name="static",
        )
        logger.info("Frontend served from %s", settings.STATIC_DIR)

    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)
    logger.info("Server is running on port %s", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
