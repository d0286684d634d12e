from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "Todo Service"
    debug: bool = False

    # Postgres (docker-compose service)
    database_url: str = "postgresql+asyncpg://postgres@localhost:5432/todos"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: float = 30.0

    log_level: str = "INFO"

    # OpenTelemetry; Jaeger all-in-one accepts OTLP/HTTP on 4318
    tracing_enabled: bool = True
    service_name: str = "todo-service"
    otlp_traces_endpoint: str = "http://localhost:4318/v1/traces"

    request_timeout_seconds: float = 10.0

    host: str = "127.0.0.1"
    port: int = 3000

    @field_validator("database_url")
    @classmethod
    def use_asyncpg_driver(cls, value: str) -> str:
        """Accept the plain postgres:// URLs that psql and libpq tools use."""
        for prefix in ("postgres://", "postgresql://"):
            if value.startswith(prefix):
                return "postgresql+asyncpg://" + value[len(prefix) :]
        return value


settings = Settings()
