import logging
from datetime import timedelta
from typing import Annotated

from fastapi import Depends
from redis.asyncio import Redis
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from application.services import ConversionService, CurrencyService, RateService
from config.settings import Settings, get_settings
from domain.exceptions.currency import ConversionError, NetworkFailureError
from infrastructure.cache.base import RateStore
from infrastructure.cache.redis_cache import RedisRateStore
from infrastructure.persistence.database import Database
from infrastructure.persistence.repositories.rate_store import SqlRateStore
from infrastructure.providers import CurrencyAPIProvider, ExchangeRateProvider

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	db: Database | None = None
	store: RateStore | None = None
	providers: dict[str, ExchangeRateProvider] | None = None


deps = AppDependencies()


def build_store(settings: Settings) -> RateStore:
	if settings.RATE_STORE_BACKEND == 'redis':
		return RedisRateStore(Redis.from_url(settings.REDIS_URL, decode_responses=True))

	deps.db = Database(settings.DATABASE_URL)
	return SqlRateStore(deps.db)


def init_dependencies() -> None:
	"""Initialize all singleton dependencies. Called at app startup."""
	logger.info('Initializing dependencies...')
	settings = get_settings()

	deps.store = build_store(settings)
	deps.providers = {
		'primary': CurrencyAPIProvider(
			settings.PRIMARY_RATES_URL, name='primary', timeout=settings.HTTP_TIMEOUT_SECONDS
		),
		'fallback': CurrencyAPIProvider(
			settings.FALLBACK_RATES_URL, name='fallback', timeout=settings.HTTP_TIMEOUT_SECONDS
		),
		'list': CurrencyAPIProvider(
			settings.CURRENCY_LIST_URL, name='currency-list', timeout=settings.HTTP_TIMEOUT_SECONDS
		),
	}
	logger.info(f'Dependencies initialized ({settings.RATE_STORE_BACKEND} rate store)')


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.store:
		await deps.store.close()
	if deps.providers:
		for provider in deps.providers.values():
			await provider.close()

	deps.db = None
	deps.store = None
	deps.providers = None
	logger.info('Cleanup complete')


async def bootstrap() -> None:
	"""Prepare storage and warm the currency list. Called after init_dependencies()."""
	logger.info('Bootstrapping application...')
	settings = get_settings()

	if deps.store is None or deps.providers is None:
		raise RuntimeError('Dependencies not initialized. Call init_dependencies() first.')

	if deps.db is not None:
		await deps.db.create_tables()
		logger.info('Database tables created')

	service = build_rate_service(deps.store, deps.providers)
	try:
		async for attempt in AsyncRetrying(
			stop=stop_after_attempt(settings.BOOTSTRAP_ATTEMPTS),
			wait=wait_exponential(multiplier=1, min=1, max=10),
			retry=retry_if_exception_type(NetworkFailureError),
			reraise=True,
		):
			with attempt:
				entry = await service.get_supported_currencies()
		logger.info(f'Currency list ready with {len(entry.codes)} codes')
	except ConversionError as e:
		logger.warning(f'Could not warm currency list, continuing without it: {e}')

	logger.info('Bootstrap complete')


def get_rate_store() -> RateStore:
	if deps.store is None:
		raise RuntimeError('Rate store not initialized')
	return deps.store


def get_providers() -> dict[str, ExchangeRateProvider]:
	if deps.providers is None:
		raise RuntimeError('Providers not initialized')
	return deps.providers


def build_rate_service(store: RateStore, providers: dict[str, ExchangeRateProvider]) -> RateService:
	settings = get_settings()
	return RateService(
		store=store,
		primary_provider=providers['primary'],
		fallback_provider=providers['fallback'],
		list_provider=providers['list'],
		rate_ttl=timedelta(hours=settings.RATE_TTL_HOURS),
		list_ttl=timedelta(hours=settings.CURRENCY_LIST_TTL_HOURS),
	)


def get_rate_service(
	store: Annotated[RateStore, Depends(get_rate_store)],
	providers: Annotated[dict[str, ExchangeRateProvider], Depends(get_providers)],
) -> RateService:
	return build_rate_service(store, providers)


def get_conversion_service(
	rate_service: Annotated[RateService, Depends(get_rate_service)],
) -> ConversionService:
	return ConversionService(rate_service=rate_service)


def get_currency_service(
	rate_service: Annotated[RateService, Depends(get_rate_service)],
) -> CurrencyService:
	return CurrencyService(
		rate_service=rate_service, timeout=get_settings().CURRENCY_LIST_TIMEOUT_SECONDS
	)
