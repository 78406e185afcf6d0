from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum

from domain.exceptions.currency import ConversionError


@dataclass(frozen=True)
class RateTableEntry:
	base_currency: str
	rates: dict[str, float]
	captured_at: datetime

	def is_fresh(self, now: datetime, ttl: timedelta) -> bool:
		return now - self.captured_at < ttl

	def rate_for(self, target_currency: str) -> float | None:
		return self.rates.get(target_currency.lower())


@dataclass(frozen=True)
class SupportedCurrencyListEntry:
	codes: tuple[str, ...]
	captured_at: datetime

	def is_fresh(self, now: datetime, ttl: timedelta) -> bool:
		return now - self.captured_at < ttl


@dataclass(frozen=True)
class ConversionRequest:
	amount: float
	source_currency: str
	target_currency: str


@dataclass(frozen=True)
class LineItem:
	amount: float
	source_currency: str
	sign: float = 1.0


@dataclass(frozen=True)
class AggregateResult:
	"""Outcome of converting a batch of line items into one currency.

	A failed result never carries a total, so callers cannot mistake it for a
	genuine zero.
	"""

	ok: bool
	total: float | None = None
	error: ConversionError | None = field(default=None, compare=False)

	@classmethod
	def success(cls, total: float) -> 'AggregateResult':
		return cls(ok=True, total=total)

	@classmethod
	def failure(cls, error: ConversionError) -> 'AggregateResult':
		return cls(ok=False, error=error)


class TransactionType(str, Enum):
	SPENDING = 'spending'
	INCOME = 'income'


class TransactionTab(str, Enum):
	ALL = 'all'
	SPENDING = 'spending'
	INCOME = 'income'


class AssetType(str, Enum):
	SAVINGS = 'savings'
	CRYPTO = 'crypto'
	INVESTMENT = 'investment'
	OTHER = 'other'


@dataclass(frozen=True)
class Transaction:
	amount: float
	currency: str
	type: TransactionType
	category: str = ''
	detail: str = ''


@dataclass(frozen=True)
class Asset:
	name: str
	amount: float
	currency: str
	type: AssetType = AssetType.OTHER
	detail: str | None = None


def transaction_sign(tab: TransactionTab, transaction_type: TransactionType) -> float:
	# Only the combined view nets spending against income.
	if tab == TransactionTab.ALL and transaction_type == TransactionType.SPENDING:
		return -1.0
	return 1.0
