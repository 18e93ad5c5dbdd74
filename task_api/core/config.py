# task_api/core/config.py
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

_ALLOWED_ENVS = {"dev", "prod", "test"}


class Settings(BaseSettings):
    # 기본 앱 설정
    app_env: str = Field("dev", alias="APP_ENV")
    app_version: str = Field("1.0.0", alias="APP_VERSION")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    cors_allow_origins: str = Field("*", alias="CORS_ALLOW_ORIGINS")

    # DB
    database_url: str = Field("sqlite:///./data/tasks.db", alias="DATABASE_URL")
    db_echo: bool = Field(False, alias="DB_ECHO")
    db_auto_create: bool = Field(True, alias="DB_AUTO_CREATE")

    # runner
    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(3000, alias="PORT")

    class Config:
        env_file = ".env"
        extra = "ignore"
        populate_by_name = True

    @field_validator("app_env")
    @classmethod
    def _check_env(cls, value: str) -> str:
        env = value.strip().lower()
        if env not in _ALLOWED_ENVS:
            allowed = "|".join(sorted(_ALLOWED_ENVS))
            raise ValueError(f"APP_ENV must be one of {allowed}")
        return env

    @property
    def origins(self) -> list[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]


def get_settings() -> Settings:
    return Settings()
