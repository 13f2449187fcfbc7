from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict


ENV_PATH = Path(__file__).resolve().parents[2] / ".env"

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=ENV_PATH, env_file_encoding="utf-8", extra="ignore")

    # App
    env: str = "dev"
    service_name: str = "mediahub-api"
    public_base_url: str = "http://localhost:8000"

    # Cache / rate limiting
    redis_url: str = "redis://localhost:6379/0"
    rate_limit_enabled: bool = True
    rate_limit_per_minute: int = 60
    trust_forwarded_for: bool = False

    # Telemetry
    telemetry_enabled: bool = True
    otlp_endpoint: str = "http://localhost:4318"  # Jaeger OTLP HTTP

    # Drive probes (server side)
    drive_probe_timeout_seconds: float = 10.0
    drive_user_agent: str = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

    # Validation (consumer side)
    validation_timeout_seconds: float = 12.0
    validation_debounce_ms: int = 500


settings = Settings()
