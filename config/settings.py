from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	DATABASE_URL: str = 'sqlite+aiosqlite:///./exchange_rates.db'

	REDIS_URL: str = 'redis://localhost:6379'

	RATE_STORE_BACKEND: Literal['sql', 'redis'] = 'sql'

	# Rate sources
	PRIMARY_RATES_URL: str = 'https://cdn.jsdelivr.net/npm/@fawazahmed0/currency-api@latest/v1'
	FALLBACK_RATES_URL: str = 'https://latest.currency-api.pages.dev/v1'
	CURRENCY_LIST_URL: str = 'https://cdn.jsdelivr.net/npm/@fawazahmed0/currency-api@latest/v1'
	HTTP_TIMEOUT_SECONDS: float = 10.0

	# Cache freshness
	RATE_TTL_HOURS: float = 12
	CURRENCY_LIST_TTL_HOURS: float = 24

	CURRENCY_LIST_TIMEOUT_SECONDS: float = 5.0
	BOOTSTRAP_ATTEMPTS: int = 3

	# Application
	APP_NAME: str = 'Exchange Rate Service'
	DEBUG: bool = True
	LOG_LEVEL: str = 'INFO'
	LOG_JSON: bool = False

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')


@lru_cache
def get_settings() -> Settings:
	return Settings()
