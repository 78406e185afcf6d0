from contextlib import asynccontextmanager

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from infrastructure.persistence.models.rates import Base


def _configure_sqlite(dbapi_connection, connection_record) -> None:
	# Readers must not block on a concurrent rate write.
	cursor = dbapi_connection.cursor()
	cursor.execute('PRAGMA journal_mode=WAL')
	cursor.execute('PRAGMA busy_timeout=5000')
	cursor.close()


class Database:
	def __init__(self, db_url: str):
		self.engine = create_async_engine(db_url)
		if self.engine.dialect.name == 'sqlite':
			event.listen(self.engine.sync_engine, 'connect', _configure_sqlite)

		self.session_factory = async_sessionmaker(
			self.engine,
			class_=AsyncSession,
			expire_on_commit=False,
		)

	async def create_tables(self) -> None:
		async with self.engine.begin() as conn:
			await conn.run_sync(Base.metadata.create_all)

	async def close(self) -> None:
		await self.engine.dispose()

	@asynccontextmanager
	async def session(self):
		async with self.session_factory() as session:
			try:
				yield session
				await session.commit()
			except Exception:
				await session.rollback()
				raise
