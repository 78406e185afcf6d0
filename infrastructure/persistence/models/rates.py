from datetime import datetime

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
	pass


class RateTableDB(Base):
	__tablename__ = 'rate_tables'

	base_currency: Mapped[str] = mapped_column(String(16), primary_key=True)
	rates: Mapped[dict] = mapped_column(JSON, nullable=False)
	captured_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class CurrencyListDB(Base):
	__tablename__ = 'currency_lists'

	key: Mapped[str] = mapped_column(String(32), primary_key=True)
	codes: Mapped[list] = mapped_column(JSON, nullable=False)
	captured_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
