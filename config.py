from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "Credit Application API"
    debug: bool = False

    database_url: str = "sqlite+aiosqlite:///./credit_applications.db"
    cors_origins: str = "*"

    # Seconds a SQLite connection waits for the write lock (or a queued session for the connection)
    sqlite_busy_timeout: float = 30.0

    host: str = "0.0.0.0"
    port: int = 3000

    # Identifier assignment: <prefix>-<year>-<000..999>
    application_id_prefix: str = "KR"
    id_max_attempts: int = 20

    # "permissive" accepts any valid status; "strict" freezes approved/rejected
    status_transition_mode: Literal["permissive", "strict"] = "permissive"

    log_level: str = "INFO"
    log_format: Literal["text", "json"] = "text"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
