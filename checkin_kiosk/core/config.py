from __future__ import annotations
from pydantic_settings import BaseSettings
from pydantic import Field

class Settings(BaseSettings):
    # eventyay / pretix API
    eventyay_url: str = Field("http://localhost:8000", alias="EVENTYAY_URL")
    eventyay_api_token: str = Field(..., alias="EVENTYAY_API_TOKEN")
    eventyay_organizer: str = Field(..., alias="EVENTYAY_ORGANIZER")
    eventyay_event_slug: str = Field(..., alias="EVENTYAY_EVENT_SLUG")
    http_timeout_seconds: float = Field(default=10.0, alias="HTTP_TIMEOUT_SECONDS")

    # badge polling: 1 immediate try + 5 retries, one second apart
    badge_poll_attempts: int = Field(default=6, ge=1, alias="BADGE_POLL_ATTEMPTS")
    badge_poll_interval_seconds: float = Field(default=1.0, alias="BADGE_POLL_INTERVAL_SECONDS")

    # printing
    print_command: str = Field("lp", alias="PRINT_COMMAND")
    printer_name: str | None = Field(default=None, alias="PRINTER_NAME")

    # NATS
    nats_urls: str = Field("nats://127.0.0.1:4222", alias="NATS_URLS")
    nats_subject_session: str = Field("kiosk.session", alias="NATS_SUBJECT_SESSION")
    use_nats_for_session: bool = Field(default=False, alias="USE_NATS_FOR_SESSION")

    log_level: str = Field("INFO", alias="LOG_LEVEL")
    cors_origins: str = Field(
        "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000,http://127.0.0.1:3000",
        alias="CORS_ORIGINS",
    )

    class Config:
        env_file = ".env"
        env_prefix = ""
        case_sensitive = False

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

_settings: Settings | None = None
def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
