from typing import Annotated

from fastapi import APIRouter, Depends, Path, status
from fastapi.responses import JSONResponse

from api.dependencies import (
	get_conversion_service,
	get_currency_service,
	get_rate_service,
)
from api.schemas import (
	ConversionResponse,
	ExchangeRateResponse,
	RateTableResponse,
	SupportedCurrenciesResponse,
	TotalRequest,
	TotalResponse,
)
from application.services import ConversionService, CurrencyService, RateService
from domain.models.currency import ConversionRequest, LineItem

router = APIRouter(prefix='/api', tags=['currency'])

CurrencyCode = Annotated[str, Path(min_length=3, max_length=5)]


@router.get(
	'/convert/{from_currency}/{to_currency}/{amount}',
	response_model=ConversionResponse,
	status_code=status.HTTP_200_OK,
	summary='Convert currency amount',
)
async def convert_currency(
	from_currency: CurrencyCode,
	to_currency: CurrencyCode,
	amount: float,
	service: Annotated[ConversionService, Depends(get_conversion_service)],
) -> ConversionResponse:
	from_currency = from_currency.upper()
	to_currency = to_currency.upper()
	converted = await service.convert(
		ConversionRequest(amount=amount, source_currency=from_currency, target_currency=to_currency)
	)
	return ConversionResponse(
		from_currency=from_currency,
		to_currency=to_currency,
		original_amount=amount,
		converted_amount=converted,
	)


@router.get(
	'/rate/{from_currency}/{to_currency}',
	response_model=ExchangeRateResponse,
	status_code=status.HTTP_200_OK,
	summary='Get current exchange rate',
)
async def get_exchange_rate(
	from_currency: CurrencyCode,
	to_currency: CurrencyCode,
	service: Annotated[RateService, Depends(get_rate_service)],
) -> ExchangeRateResponse:
	from_currency = from_currency.upper()
	to_currency = to_currency.upper()

	rate = await service.get_rate(from_currency, to_currency)
	return ExchangeRateResponse(from_currency=from_currency, to_currency=to_currency, rate=rate)


@router.get(
	'/rates/{base_currency}',
	response_model=RateTableResponse,
	status_code=status.HTTP_200_OK,
	summary='Get the rate table for a base currency',
)
async def get_rate_table(
	base_currency: CurrencyCode,
	service: Annotated[RateService, Depends(get_rate_service)],
) -> RateTableResponse:
	entry = await service.get_rate_table(base_currency)
	return RateTableResponse(
		base_currency=entry.base_currency.upper(),
		rates=entry.rates,
		captured_at=entry.captured_at,
	)


@router.get(
	'/currencies',
	response_model=SupportedCurrenciesResponse,
	status_code=status.HTTP_200_OK,
	summary='List supported currencies',
)
async def get_supported_currencies(
	service: Annotated[CurrencyService, Depends(get_currency_service)],
) -> SupportedCurrenciesResponse:
	listing = await service.list_currencies()
	return SupportedCurrenciesResponse(currencies=list(listing.codes), fallback=listing.is_fallback)


@router.post(
	'/totals',
	response_model=TotalResponse,
	status_code=status.HTTP_200_OK,
	summary='Convert and sum line items into one currency',
	responses={status.HTTP_503_SERVICE_UNAVAILABLE: {'model': TotalResponse}},
)
async def get_total(
	request: TotalRequest,
	service: Annotated[ConversionService, Depends(get_conversion_service)],
):
	items = [
		LineItem(amount=item.amount, source_currency=item.currency, sign=item.sign)
		for item in request.items
	]
	result = await service.total(items, request.target_currency)

	if not result.ok:
		body = TotalResponse(
			ok=False,
			target_currency=request.target_currency,
			detail='Could not convert all items',
		)
		return JSONResponse(
			status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body.model_dump()
		)

	return TotalResponse(ok=True, target_currency=request.target_currency, total=result.total)
