from typing import List, Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

BackfillPolicy = Literal["lazy", "on-read", "startup"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    database_url: str = "sqlite:///./scanops.db"
    log_level: str = "INFO"
    api_prefix: str = "/api/v0"

    # Stub de auth: se acepta cualquier Bearer con este prefijo
    operator_token_prefix: str = "mock-"
    default_actor_email: str = "ops@example.com"

    completion_token_bytes: int = 32

    # lazy: los pasos se materializan solo para mostrar, nunca se guardan
    # on-read: leer el detalle del job persiste los pasos materializados
    # startup: backfill de todos los jobs legacy al arrancar la app
    workflow_backfill_policy: BackfillPolicy = "lazy"

    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:5173"]


settings = Settings()  # lee del entorno y de .env
