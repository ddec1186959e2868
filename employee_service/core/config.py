from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # MongoDB 접속 정보 (MONGO_URI도 허용)
    MONGODB_URI: str = Field(
        "mongodb://localhost:27017",
        validation_alias=AliasChoices("MONGODB_URI", "MONGO_URI"),
    )
    MONGODB_DB_NAME: str = "employee_app"
    MONGODB_COLLECTION_NAME: str = "employees"
    MONGODB_SERVER_SELECTION_TIMEOUT_MS: int = 5000

    # "development"일 때만 500 응답에 에러 상세를 노출
    APP_ENV: str = "production"

    API_PREFIX: str = "/api"
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    LOG_LEVEL: str = "INFO"

    # 프론트엔드 빌드 결과물 경로 (없으면 마운트하지 않음)
    STATIC_DIR: str = "dist/build"
    CORS_ORIGINS: list[str] = ["*"]

    @property
    def is_development(self) -> bool:
        return self.APP_ENV.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
