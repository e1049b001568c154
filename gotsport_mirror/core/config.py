"""
Zentrale Konfiguration für den GotSport Mirror
Basiert auf Pydantic Settings mit Environment Variable Support
"""

from typing import Optional

from pydantic_settings import BaseSettings

MOBILE_SAFARI_UA = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"
)


class Settings(BaseSettings):
    """Application Settings mit Environment Variable Support (Prefix GOTSPORT_)"""

    # Upstream site
    base_url: str = "https://system.gotsport.com"
    event_id: str = "46915"
    club_id: str = "28533"

    # HTTP
    user_agent: str = MOBILE_SAFARI_UA
    accept_language: str = "en-GB,en;q=0.9"
    request_timeout_seconds: float = 30.0

    # Cache
    cache_backend: str = "memory"  # memory | redis
    cache_key_prefix: str = "gotsport_"
    redis_url: str = "redis://localhost:6379"

    # Club identity used by the name-matching heuristics
    club_name: str = "St Albans"

    # Monitoring
    log_level: str = "INFO"
    log_format: Optional[str] = None  # console | json; falls back to LOG_FORMAT

    model_config = {
        "env_prefix": "GOTSPORT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


# Global Settings Instance
settings = Settings()
