from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.infrastructure.exceptions import InvalidSubkeyError
from src.infrastructure.external.concrnt.credentials import Subkey


class Settings(BaseSettings):
    # App
    app_name: str = "Timeline Bridge"
    app_version: str = "1.0.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3000

    # Upstream credentials
    subkey: str = ""  # Loaded from environment, validated in model_validator
    # Comma-separated list of trusted proxy addresses for X-Forwarded-For
    proxy_ip: str | None = None

    # Upstream services
    upstream_timeout: float = 10.0  # seconds, per upstream call
    # Startup check of the credential against the home server
    upstream_connect_attempts: int = Field(3, ge=1)
    upstream_connect_retry_delay: float = 2.0  # seconds, doubled after each retry
    summary_service_url: str = "https://denken.concrnt.net/summary"
    asset_host_url: str = "https://assets.resonite.com/"

    # Image proxy
    image_proxy_url: str = "https://denken.concrnt.net/image/x,webp/"
    image_proxy_enabled: bool = True

    # Link previews, media attachments and reroutes ("lite" deployments turn this off)
    rich_entries_enabled: bool = True

    # Display
    display_timezone: str = "Asia/Tokyo"

    # Posting
    post_rate_limit: str = "2/5 minutes"
    rate_limit_message: str = (
        "5分間に2回しか投稿できません。少し待ってから再度お試しください。"
    )
    max_request_size: int = 1024 * 1024  # 1MB

    # OpenTelemetry Distributed Tracing
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"  # Options: "console", "otlp", "none"
    telemetry_otlp_endpoint: str | None = None  # e.g., "http://localhost:4317"
    telemetry_sample_rate: float = 1.0  # Sampling rate (0.0-1.0, 1.0 = 100%)
    telemetry_environment: str = "development"  # deployment environment tag

    @model_validator(mode="after")
    def validate_upstream_config(self) -> "Settings":
        """Validate the upstream credential and exporter selection"""
        if not self.subkey:
            raise ValueError("SUBKEY is required. Set in environment or .env file.")
        try:
            Subkey.parse(self.subkey)
        except InvalidSubkeyError as e:
            raise ValueError(f"SUBKEY is malformed: {e.details['reason']}") from e

        if self.telemetry_exporter not in ("console", "otlp", "none"):
            raise ValueError(
                f"Invalid telemetry_exporter '{self.telemetry_exporter}'. "
                f"Must be one of: 'console', 'otlp', 'none'"
            )
        return self

    @property
    def credential(self) -> Subkey:
        return Subkey.parse(self.subkey)

    @property
    def home_host(self) -> str:
        """Domain the subkey's entity lives on"""
        return self.credential.domain

    @property
    def trusted_proxies(self) -> list[str]:
        if not self.proxy_ip:
            return []
        return [ip.strip() for ip in self.proxy_ip.split(",") if ip.strip()]

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="allow", case_sensitive=False
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
