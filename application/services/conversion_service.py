import asyncio
import logging
from collections.abc import Iterable

from application.services.rate_service import RateService
from domain.exceptions.currency import ConversionError
from domain.models.currency import (
	AggregateResult,
	Asset,
	ConversionRequest,
	LineItem,
	Transaction,
	TransactionTab,
	transaction_sign,
)

logger = logging.getLogger(__name__)


class ConversionService:
	def __init__(self, rate_service: RateService):
		self.rate_service = rate_service

	async def convert(self, request: ConversionRequest) -> float:
		return await self.rate_service.convert(
			request.amount, request.source_currency, request.target_currency
		)

	async def total(self, items: Iterable[LineItem], target_currency: str) -> AggregateResult:
		"""Convert every item into ``target_currency`` and sum the signed results.

		All conversions run concurrently and the result is only produced once
		every one of them has finished. If any conversion fails the whole
		result is a failure carrying the first error to complete, which
		depends on network timing rather than input order. Conversions still
		in flight when another fails are left to finish.
		"""
		items = list(items)
		failures: list[ConversionError] = []

		async def convert_item(item: LineItem) -> float | None:
			try:
				converted = await self.rate_service.convert(
					item.amount, item.source_currency, target_currency
				)
			except ConversionError as e:
				logger.warning(
					f'Error converting {item.amount} {item.source_currency} to {target_currency}: {e}'
				)
				failures.append(e)
				return None
			return converted * item.sign

		results = await asyncio.gather(*(convert_item(item) for item in items))

		if failures:
			return AggregateResult.failure(failures[0])
		return AggregateResult.success(sum(results, 0.0))

	async def transaction_total(
		self,
		transactions: Iterable[Transaction],
		target_currency: str,
		tab: TransactionTab = TransactionTab.ALL,
	) -> AggregateResult:
		items = [
			LineItem(
				amount=tx.amount,
				source_currency=tx.currency,
				sign=transaction_sign(tab, tx.type),
			)
			for tx in transactions
		]
		return await self.total(items, target_currency)

	async def asset_total(self, assets: Iterable[Asset], target_currency: str) -> AggregateResult:
		items = [LineItem(amount=asset.amount, source_currency=asset.currency) for asset in assets]
		return await self.total(items, target_currency)
