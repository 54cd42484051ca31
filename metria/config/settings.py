from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    anthropic_api_key: str = ""
    analysis_model: str = "sonnet"
    analysis_timeout_seconds: float = 30.0
    analysis_language: str = "pt-BR"
    store_path: str = ""
    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"
    admin_email: str = "admin@metria.com"
    admin_password: str = "admin"

    model_config = SettingsConfigDict(env_prefix="METRIA_", env_file=".env")
