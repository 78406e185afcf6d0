import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from domain.exceptions.currency import (
	ConversionError,
	DecodingFailureError,
	InvalidRequestError,
	NetworkFailureError,
	RateNotFoundError,
)
from domain.models.currency import RateTableEntry, SupportedCurrencyListEntry
from infrastructure.cache.base import RateStore
from infrastructure.providers.base import ExchangeRateProvider

logger = logging.getLogger(__name__)

RATE_TTL = timedelta(hours=12)
LIST_TTL = timedelta(hours=24)


def utc_now() -> datetime:
	return datetime.now(UTC)


def normalize_code(code: str) -> str:
	if not isinstance(code, str) or not (code.strip().isascii() and code.strip().isalpha()):
		raise InvalidRequestError(f'Invalid currency code: {code!r}')
	return code.strip().lower()


class RateService:
	"""Cache-aside access to rate tables and the supported-currency list.

	Rate tables are read from the store while younger than ``rate_ttl``. On a
	miss the primary source is queried once, then the fallback once. Any
	successful network result overwrites the stored entry.
	"""

	def __init__(
		self,
		store: RateStore,
		primary_provider: ExchangeRateProvider,
		fallback_provider: ExchangeRateProvider,
		list_provider: ExchangeRateProvider | None = None,
		rate_ttl: timedelta = RATE_TTL,
		list_ttl: timedelta = LIST_TTL,
		clock: Callable[[], datetime] = utc_now,
	):
		self.store = store
		self.primary_provider = primary_provider
		self.fallback_provider = fallback_provider
		self.list_provider = list_provider or primary_provider
		self.rate_ttl = rate_ttl
		self.list_ttl = list_ttl
		self.clock = clock

	async def get_rate_table(self, base_currency: str) -> RateTableEntry:
		base = normalize_code(base_currency)

		cached = await self.store.get_rate_entry(base)
		if cached is not None and cached.is_fresh(self.clock(), self.rate_ttl):
			logger.debug(f'Rate cache hit for {base}')
			return cached

		logger.debug(f'Rate cache miss for {base}')
		last_error: ConversionError | None = None
		for provider in (self.primary_provider, self.fallback_provider):
			try:
				rates = await provider.fetch_rate_table(base)
			except (NetworkFailureError, DecodingFailureError) as e:
				logger.warning(f'Provider {provider.name} failed for {base}: {e}')
				last_error = e
				continue

			entry = RateTableEntry(base_currency=base, rates=rates, captured_at=self.clock())
			await self.store.put_rate_entry(entry)
			logger.info(f'Stored {len(rates)} rates for {base} from {provider.name}')
			return entry

		raise NetworkFailureError(f'All rate sources failed for {base}') from last_error

	async def get_rate(self, from_currency: str, to_currency: str) -> float:
		target = normalize_code(to_currency)
		entry = await self.get_rate_table(from_currency)
		rate = entry.rate_for(target)
		if rate is None:
			raise RateNotFoundError(f'No rate from {entry.base_currency} to {target}')
		return rate

	async def convert(self, amount: float, from_currency: str, to_currency: str) -> float:
		if normalize_code(from_currency) == normalize_code(to_currency):
			return amount

		rate = await self.get_rate(from_currency, to_currency)
		return amount * rate

	async def get_supported_currencies(self) -> SupportedCurrencyListEntry:
		cached = await self.store.get_supported_currency_list()
		if cached is not None and cached.is_fresh(self.clock(), self.list_ttl):
			logger.debug('Currency list cache hit')
			return cached

		codes = await self.list_provider.fetch_currency_codes()
		normalized = tuple(sorted({code.upper() for code in codes}))
		if not normalized:
			raise DecodingFailureError(f'{self.list_provider.name} returned no currencies')

		entry = SupportedCurrencyListEntry(codes=normalized, captured_at=self.clock())
		await self.store.put_supported_currency_list(entry)
		logger.info(f'Stored {len(normalized)} supported currencies')
		return entry
