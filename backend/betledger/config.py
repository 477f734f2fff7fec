from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine.url import URL, make_url


class Settings(BaseSettings):
    app_name: str = "BetLedger"
    database_url: str = "postgresql+asyncpg://postgres:postgres@db:5432/betledger"
    sql_echo: bool = False

    odds_api_key: str = ""
    odds_api_base_url: str = "https://api.the-odds-api.com/v4"
    odds_api_regions: str = "us"
    odds_api_markets: str = "h2h,spreads,totals"

    espn_base_url: str = "https://site.api.espn.com/apis/site/v2/sports"

    llm_api_key: str = ""
    llm_api_url: str = "https://api.anthropic.com/v1/messages"
    llm_model: str = "claude-sonnet-4-20250514"
    llm_max_tokens: int = 1024
    llm_api_version: str = "2023-06-01"

    http_timeout_seconds: float = 20.0
    auto_settle_interval_minutes: int = 30
    auto_settle_grace_hours: int = 3

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()


def get_database_url() -> str:
    return settings.database_url


def get_database_identity() -> tuple[str, str]:
    parsed: URL = make_url(get_database_url())
    return parsed.host or "<unknown>", parsed.database or "<unknown>"
