from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings

PRODUCTION = "production"
DEVELOPMENT = "development"


class Settings(BaseSettings):
    # App
    debug: bool = False

    ENVIRONMENT: str = DEVELOPMENT

    # RSVP submission (client side)
    # Origin relative endpoints resolve against, i.e. where the invitation is served.
    APP_ORIGIN: str = "http://localhost:8000"
    API_BASE_URL: str = ""
    RSVP_ENDPOINT: str = ""
    RSVP_POST_ENABLED: bool | None = None
    RSVP_HTTP_TIMEOUT_SECONDS: float | None = None

    # RSVP proxy (server side)
    RSVP_PROXY_TARGET_BASE_URL: str = ""

    SENTRY_DSN: str = ""
    SENTRY_TRACES_SAMPLE_RATE: float = 0.0
    SENTRY_PROFILES_SAMPLE_RATE: float = 0.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @field_validator("RSVP_POST_ENABLED", mode="before")
    @classmethod
    def parse_post_enabled(cls, v):
        """Accept true/1/yes and false/0/no, anything else means unset."""
        if v is None or isinstance(v, bool):
            return v
        value = str(v).strip().lower()
        if value in ("true", "1", "yes"):
            return True
        if value in ("false", "0", "no"):
            return False
        return None

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.strip().lower() == PRODUCTION

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.strip().lower() == DEVELOPMENT

    @property
    def api_base_url(self) -> str:
        return self.API_BASE_URL.strip()


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
