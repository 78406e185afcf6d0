import json
import logging

from redis import asyncio as redis

from domain.models.currency import RateTableEntry, SupportedCurrencyListEntry
from infrastructure.cache.base import (
	RateStore,
	currency_list_from_dict,
	currency_list_to_dict,
	rate_entry_from_dict,
	rate_entry_to_dict,
)

logger = logging.getLogger(__name__)

CURRENCY_LIST_KEY = 'currencies:supported'


class RedisRateStore(RateStore):
	def __init__(self, redis_client: redis.Redis):
		self.redis = redis_client

	def _make_rate_key(self, base_currency: str) -> str:
		return f'rates:{base_currency.lower()}'

	async def get_rate_entry(self, base_currency: str) -> RateTableEntry | None:
		key = self._make_rate_key(base_currency)
		data = await self.redis.get(key)
		if not data:
			return None

		try:
			return rate_entry_from_dict(json.loads(data))
		except (ValueError, KeyError, TypeError, AttributeError) as e:
			logger.warning(f'Ignoring unreadable cache entry {key}: {e}')
			return None

	async def put_rate_entry(self, entry: RateTableEntry) -> None:
		key = self._make_rate_key(entry.base_currency)
		await self.redis.set(key, json.dumps(rate_entry_to_dict(entry)))

	async def get_supported_currency_list(self) -> SupportedCurrencyListEntry | None:
		data = await self.redis.get(CURRENCY_LIST_KEY)
		if not data:
			return None

		try:
			return currency_list_from_dict(json.loads(data))
		except (ValueError, KeyError, TypeError) as e:
			logger.warning(f'Ignoring unreadable cache entry {CURRENCY_LIST_KEY}: {e}')
			return None

	async def put_supported_currency_list(self, entry: SupportedCurrencyListEntry) -> None:
		await self.redis.set(CURRENCY_LIST_KEY, json.dumps(currency_list_to_dict(entry)))

	async def close(self) -> None:
		await self.redis.aclose()
