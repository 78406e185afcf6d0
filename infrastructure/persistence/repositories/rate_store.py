import asyncio
from datetime import UTC, datetime

from domain.models.currency import RateTableEntry, SupportedCurrencyListEntry
from infrastructure.cache.base import RateStore
from infrastructure.persistence.database import Database
from infrastructure.persistence.models.rates import CurrencyListDB, RateTableDB

CURRENCY_LIST_KEY = 'supported'


def _as_utc(dt: datetime) -> datetime:
	# SQLite hands back naive datetimes even for timezone-aware columns.
	if dt.tzinfo is None:
		return dt.replace(tzinfo=UTC)
	return dt


class SqlRateStore(RateStore):
	def __init__(self, database: Database):
		self.db = database
		self._write_lock = asyncio.Lock()

	async def get_rate_entry(self, base_currency: str) -> RateTableEntry | None:
		async with self.db.session() as session:
			row = await session.get(RateTableDB, base_currency.lower())
			if row is None:
				return None
			return RateTableEntry(
				base_currency=row.base_currency,
				rates={str(k): float(v) for k, v in row.rates.items()},
				captured_at=_as_utc(row.captured_at),
			)

	async def put_rate_entry(self, entry: RateTableEntry) -> None:
		async with self._write_lock, self.db.session() as session:
			await session.merge(
				RateTableDB(
					base_currency=entry.base_currency.lower(),
					rates=dict(entry.rates),
					captured_at=entry.captured_at.astimezone(UTC),
				)
			)

	async def get_supported_currency_list(self) -> SupportedCurrencyListEntry | None:
		async with self.db.session() as session:
			row = await session.get(CurrencyListDB, CURRENCY_LIST_KEY)
			if row is None:
				return None
			return SupportedCurrencyListEntry(
				codes=tuple(row.codes),
				captured_at=_as_utc(row.captured_at),
			)

	async def put_supported_currency_list(self, entry: SupportedCurrencyListEntry) -> None:
		async with self._write_lock, self.db.session() as session:
			await session.merge(
				CurrencyListDB(
					key=CURRENCY_LIST_KEY,
					codes=list(entry.codes),
					captured_at=entry.captured_at.astimezone(UTC),
				)
			)

	async def close(self) -> None:
		await self.db.close()
