import json
import math
from decimal import Decimal
from typing import Any

import httpx

from domain.exceptions.currency import (
	DecodingFailureError,
	InvalidRequestError,
	NetworkFailureError,
)
from infrastructure.providers.base import ExchangeRateProvider


def extract_rates(payload: Any, base_currency: str) -> dict[str, float]:
	"""Pull the ``{target: rate}`` table for ``base_currency`` out of a raw payload.

	Rates may arrive as ints, floats or Decimals; all are normalised to float.
	Non-numeric and non-finite entries are skipped.
	"""
	if not isinstance(payload, dict):
		raise DecodingFailureError(f'Expected a JSON object, got {type(payload).__name__}')

	table = payload.get(base_currency)
	if not isinstance(table, dict):
		raise DecodingFailureError(f'Payload has no rate table for {base_currency}')

	rates = {}
	for target, value in table.items():
		if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
			continue
		rate = float(value)
		if not math.isfinite(rate):
			continue
		rates[str(target).lower()] = rate

	if not rates:
		raise DecodingFailureError(f'Rate table for {base_currency} is empty')
	return rates


class CurrencyAPIProvider(ExchangeRateProvider):
	"""Client for a mirror of the fawazahmed0 currency-api static JSON files."""

	def __init__(
		self,
		base_url: str,
		name: str,
		client: httpx.AsyncClient | None = None,
		timeout: float = 10,
	):
		self.base_url = base_url.rstrip('/')
		self._name = name
		self._client = client or httpx.AsyncClient(timeout=timeout)

	@property
	def name(self) -> str:
		return self._name

	async def _request(self, path: str) -> Any:
		url = f'{self.base_url}/{path}'
		try:
			response = await self._client.get(url)
			response.raise_for_status()
			return response.json()

		except httpx.HTTPStatusError as e:
			raise NetworkFailureError(
				f'{self.name} HTTP error {e.response.status_code}: {e.response.text[:200]}'
			) from e
		except httpx.InvalidURL as e:
			raise InvalidRequestError(f'{self.name} invalid URL: {url}') from e
		except httpx.RequestError as e:
			raise NetworkFailureError(f'{self.name} request failed: {e.__class__.__name__}') from e
		except (json.JSONDecodeError, UnicodeDecodeError) as e:
			raise DecodingFailureError(f'{self.name} returned invalid JSON: {str(e)}') from e

	async def fetch_rate_table(self, base_currency: str) -> dict[str, float]:
		base = base_currency.lower()
		data = await self._request(f'currencies/{base}.json')
		try:
			return extract_rates(data, base)
		except DecodingFailureError as e:
			raise DecodingFailureError(f'{self.name}: {e}') from e

	async def fetch_currency_codes(self) -> list[str]:
		data = await self._request('currencies.json')
		if not isinstance(data, dict):
			raise DecodingFailureError(f'{self.name} currency list is not a JSON object')
		return [str(code) for code in data]

	async def close(self) -> None:
		await self._client.aclose()
