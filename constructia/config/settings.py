from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "constructia"
    db_username: str = "constructia"
    db_password: str = "secret"

    worker_poll_interval_seconds: int = 5
    worker_batch_size: int = 10
    worker_failed_retry_seconds: int = 300

    storage_driver: str = "local"
    files_root: str = "/app/files"
    storage_bucket: str = "documents"
    storage_supabase_url: str = ""
    storage_supabase_service_key: str = ""
    storage_timeout_seconds: int = 30

    platform_provider: str = "simulated"
    platform_base_url: str = ""
    platform_timeout_seconds: int = 30
    platform_simulated_success_rate: float = 0.9
    platform_simulated_delay_seconds: float = 2.0

    handoff_max_attempts: int = 3
    handoff_backoff_base_seconds: float = 1.0
    handoff_backoff_max_seconds: float = 5.0
    handoff_backoff_jitter_seconds: float = 0.5

    retention_days: int = 7
    audit_ip_address: str = "127.0.0.1"

    classification_enabled: bool = True
    classification_provider: str = "example"
    classification_max_text_chars: int = 8000
    classification_openai_api_key: str = ""
    classification_openai_model_name: str = "gpt-4o-mini"
    classification_openai_timeout_seconds: int = 30
    classification_openai_temperature: float = 0.0
    classification_openai_compatible_api_key: str = ""
    classification_openai_compatible_model_name: str = ""
    classification_openai_compatible_base_url: str = ""
    classification_openai_compatible_timeout_seconds: int = 30
