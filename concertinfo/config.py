from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    log_level: str = "INFO"
    database_url: str = "sqlite+aiosqlite:///data/concertinfo.db"
    api_key: str = ""

    lastfm_base_url: str = "https://www.last.fm"
    default_city: str = "Paris"
    default_username: str = "saiff"

    default_time: str = "20:00"
    genre_label: str = "Concert"
    comment_prefix: str = "🎵 Last.fm: "

    navigation_timeout_ms: int = 30000
    ready_timeout_ms: int = 10000
    user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )
    viewport_width: int = 1920
    viewport_height: int = 1080

    store_backend: str = "database"  # "database" or "rest"
    rest_store_url: str = ""
    rest_store_key: str = ""
    rest_store_table: str = "concerts"

    @field_validator("default_city", mode="before")
    @classmethod
    def default_empty_city(cls, v: str) -> str:
        if not v or not v.strip():
            return "Paris"
        return v

    model_config = {"env_prefix": "", "case_sensitive": False}


settings = Settings()
