from abc import ABC, abstractmethod


class ExchangeRateProvider(ABC):
	"""A remote source of per-base-currency rate tables."""

	@property
	@abstractmethod
	def name(self) -> str: ...

	@abstractmethod
	async def fetch_rate_table(self, base_currency: str) -> dict[str, float]:
		"""Return every rate quoted against ``base_currency``, keyed by lowercase code."""

	@abstractmethod
	async def fetch_currency_codes(self) -> list[str]:
		"""Return the raw currency codes the source knows about."""

	@abstractmethod
	async def close(self) -> None: ...
