# taskboard/core/config.py
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    app_env: str = Field("dev", alias="ENV")
    app_version: str = Field("0.1.0", alias="APP_VERSION")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    # DB (engine URL policy lives in taskboard.db.session)
    database_url: str = Field("", alias="DATABASE_URL")

    # 토큰 서명 설정. 서명 키가 비어 있으면 로그인 시 ConfigError
    jwt_secret_key: Optional[str] = Field(None, alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    access_token_expire_hours: int = Field(72, alias="ACCESS_TOKEN_EXPIRE_HOURS")

    bcrypt_rounds: int = Field(12, alias="BCRYPT_ROUNDS")

    # 목록 조회 상한
    max_page_size: int = Field(100, alias="MAX_PAGE_SIZE")

    # e.g. "Asia/Seoul"; unset means calendar dates come straight from stored values
    stats_timezone: Optional[str] = Field(None, alias="STATS_TIMEZONE")

    cors_allow_origins: str = Field(
        "http://localhost:5173,http://localhost:3000", alias="CORS_ALLOW_ORIGINS"
    )

    @property
    def origins(self) -> list[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings, loaded once. FastAPI Depends(get_settings)에서도 사용."""
    return Settings()
