import asyncio
import logging
from dataclasses import dataclass

from application.services.rate_service import RateService
from domain.exceptions.currency import ConversionError

logger = logging.getLogger(__name__)

FALLBACK_CURRENCIES = ('USD', 'EUR', 'GBP', 'JPY', 'CAD', 'AUD', 'CHF', 'CNY', 'INR', 'KRW')
DEFAULT_CURRENCY = 'USD'


@dataclass(frozen=True)
class CurrencyListing:
	codes: tuple[str, ...]
	is_fallback: bool = False
	error: str | None = None


class CurrencyService:
	"""Currency choices for pickers, with a built-in list when the source is slow or down."""

	def __init__(self, rate_service: RateService, timeout: float = 5.0):
		self.rate_service = rate_service
		self.timeout = timeout

	async def list_currencies(self) -> CurrencyListing:
		try:
			entry = await asyncio.wait_for(
				self.rate_service.get_supported_currencies(), timeout=self.timeout
			)
		except TimeoutError:
			logger.warning(f'Currency list timed out after {self.timeout}s, using fallback list')
			return CurrencyListing(codes=FALLBACK_CURRENCIES, is_fallback=True, error='timeout')
		except ConversionError as e:
			logger.warning(f'Currency list unavailable, using fallback list: {e}')
			return CurrencyListing(codes=FALLBACK_CURRENCIES, is_fallback=True, error=str(e))

		return CurrencyListing(codes=entry.codes)

	@staticmethod
	def resolve_default(current: str, codes: tuple[str, ...]) -> str:
		if current.upper() in codes:
			return current.upper()
		return codes[0] if codes else DEFAULT_CURRENCY
