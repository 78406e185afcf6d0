# nosec B101


import asyncio
from datetime import UTC, datetime, timedelta

import pytest
import pytest_asyncio

from domain.models.currency import RateTableEntry, SupportedCurrencyListEntry
from infrastructure.persistence.database import Database
from infrastructure.persistence.repositories.rate_store import SqlRateStore

CAPTURED_AT = datetime(2025, 6, 24, 10, 30, tzinfo=UTC)


@pytest.fixture
def db_url(tmp_path):
    return f'sqlite+aiosqlite:///{tmp_path / "rates.db"}'


@pytest_asyncio.fixture
async def sql_store(db_url):
    database = Database(db_url)
    await database.create_tables()
    store = SqlRateStore(database)
    yield store
    await store.close()


@pytest.mark.asyncio
async def test_missing_entries_return_none(sql_store):
    assert await sql_store.get_rate_entry('usd') is None
    assert await sql_store.get_supported_currency_list() is None


@pytest.mark.asyncio
async def test_rate_entry_round_trip(sql_store):
    entry = RateTableEntry('usd', {'eur': 0.92, 'jpy': 160.5}, CAPTURED_AT)

    await sql_store.put_rate_entry(entry)

    assert await sql_store.get_rate_entry('USD') == entry


@pytest.mark.asyncio
async def test_put_rate_entry_overwrites_previous(sql_store):
    await sql_store.put_rate_entry(RateTableEntry('usd', {'eur': 0.92}, CAPTURED_AT))
    newer = RateTableEntry('usd', {'eur': 0.95}, CAPTURED_AT + timedelta(hours=13))

    await sql_store.put_rate_entry(newer)

    assert await sql_store.get_rate_entry('usd') == newer


@pytest.mark.asyncio
async def test_entries_are_keyed_by_base_currency(sql_store):
    await sql_store.put_rate_entry(RateTableEntry('usd', {'eur': 0.92}, CAPTURED_AT))
    await sql_store.put_rate_entry(RateTableEntry('eur', {'usd': 1.08}, CAPTURED_AT))

    assert (await sql_store.get_rate_entry('usd')).rates == {'eur': 0.92}
    assert (await sql_store.get_rate_entry('eur')).rates == {'usd': 1.08}


@pytest.mark.asyncio
async def test_currency_list_is_a_singleton(sql_store):
    await sql_store.put_supported_currency_list(SupportedCurrencyListEntry(('USD',), CAPTURED_AT))
    latest = SupportedCurrencyListEntry(('EUR', 'USD'), CAPTURED_AT + timedelta(days=1))

    await sql_store.put_supported_currency_list(latest)

    assert await sql_store.get_supported_currency_list() == latest


@pytest.mark.asyncio
async def test_concurrent_writes_to_same_key(sql_store):
    entries = [
        RateTableEntry('usd', {'eur': 0.9 + i / 100}, CAPTURED_AT + timedelta(minutes=i))
        for i in range(5)
    ]

    await asyncio.gather(*(sql_store.put_rate_entry(entry) for entry in entries))

    stored = await sql_store.get_rate_entry('usd')
    assert stored in entries


@pytest.mark.asyncio
async def test_entries_survive_restart(db_url):
    first = Database(db_url)
    await first.create_tables()
    entry = RateTableEntry('gbp', {'usd': 1.27}, CAPTURED_AT)
    await SqlRateStore(first).put_rate_entry(entry)
    await first.close()

    second = Database(db_url)
    await second.create_tables()
    restored = await SqlRateStore(second).get_rate_entry('gbp')
    await second.close()

    assert restored == entry
    assert restored.captured_at.tzinfo is not None
