from abc import ABC, abstractmethod
from datetime import datetime

from domain.models.currency import RateTableEntry, SupportedCurrencyListEntry


class RateStore(ABC):
	"""Durable storage for rate tables and the supported-currency list.

	A store only returns what it holds together with the capture timestamp.
	Deciding whether an entry is still fresh is left to the caller.
	"""

	@abstractmethod
	async def get_rate_entry(self, base_currency: str) -> RateTableEntry | None: ...

	@abstractmethod
	async def put_rate_entry(self, entry: RateTableEntry) -> None: ...

	@abstractmethod
	async def get_supported_currency_list(self) -> SupportedCurrencyListEntry | None: ...

	@abstractmethod
	async def put_supported_currency_list(self, entry: SupportedCurrencyListEntry) -> None: ...

	async def close(self) -> None:
		return None


def rate_entry_to_dict(entry: RateTableEntry) -> dict:
	return {
		'base_currency': entry.base_currency,
		'rates': entry.rates,
		'captured_at': entry.captured_at.isoformat(),
	}


def rate_entry_from_dict(data: dict) -> RateTableEntry:
	return RateTableEntry(
		base_currency=data['base_currency'],
		rates={str(k): float(v) for k, v in data['rates'].items()},
		captured_at=datetime.fromisoformat(data['captured_at']),
	)


def currency_list_to_dict(entry: SupportedCurrencyListEntry) -> dict:
	return {'codes': list(entry.codes), 'captured_at': entry.captured_at.isoformat()}


def currency_list_from_dict(data: dict) -> SupportedCurrencyListEntry:
	return SupportedCurrencyListEntry(
		codes=tuple(data['codes']),
		captured_at=datetime.fromisoformat(data['captured_at']),
	)
