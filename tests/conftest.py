"""
Shared fixtures: an in-memory rate store, a controllable clock and mocked providers.
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from domain.models.currency import RateTableEntry, SupportedCurrencyListEntry
from infrastructure.cache.base import RateStore
from infrastructure.providers.base import ExchangeRateProvider


class InMemoryRateStore(RateStore):
    def __init__(self):
        self.rate_entries: dict[str, RateTableEntry] = {}
        self.currency_list: SupportedCurrencyListEntry | None = None
        self.rate_writes = 0
        self.list_writes = 0

    async def get_rate_entry(self, base_currency):
        return self.rate_entries.get(base_currency.lower())

    async def put_rate_entry(self, entry):
        self.rate_writes += 1
        self.rate_entries[entry.base_currency.lower()] = entry

    async def get_supported_currency_list(self):
        return self.currency_list

    async def put_supported_currency_list(self, entry):
        self.list_writes += 1
        self.currency_list = entry


class FrozenClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


def make_provider(name: str) -> AsyncMock:
    provider = AsyncMock(spec=ExchangeRateProvider)
    provider.name = name
    return provider


@pytest.fixture
def store():
    return InMemoryRateStore()


@pytest.fixture
def clock():
    return FrozenClock(datetime(2025, 6, 24, 12, 0, tzinfo=UTC))


@pytest.fixture
def primary():
    return make_provider('primary')


@pytest.fixture
def fallback():
    return make_provider('fallback')
