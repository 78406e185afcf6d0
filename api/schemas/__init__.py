from .requests import LineItemRequest, TotalRequest
from .responses import (
	ConversionResponse,
	ExchangeRateResponse,
	RateTableResponse,
	SupportedCurrenciesResponse,
	TotalResponse,
)

__all__ = [
	'ConversionResponse',
	'ExchangeRateResponse',
	'LineItemRequest',
	'RateTableResponse',
	'SupportedCurrenciesResponse',
	'TotalRequest',
	'TotalResponse',
]
