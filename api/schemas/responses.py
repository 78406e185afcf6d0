from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ConversionResponse(BaseModel):
	from_currency: str = Field(..., description='Source currency code')
	to_currency: str = Field(..., description='Target currency code')
	original_amount: float = Field(..., description='Original amount requested')
	converted_amount: float = Field(..., description='Converted amount')

	model_config = ConfigDict(
		json_schema_extra={
			'example': {
				'from_currency': 'USD',
				'to_currency': 'EUR',
				'original_amount': 100.00,
				'converted_amount': 85.50,
			}
		}
	)


class ExchangeRateResponse(BaseModel):
	from_currency: str = Field(..., description='Source currency code')
	to_currency: str = Field(..., description='Target currency code')
	rate: float = Field(..., description='Units of target currency per unit of source')


class RateTableResponse(BaseModel):
	base_currency: str = Field(..., description='Base currency code')
	rates: dict[str, float] = Field(..., description='Rates keyed by lowercase target code')
	captured_at: datetime = Field(..., description='When the table was fetched')


class SupportedCurrenciesResponse(BaseModel):
	currencies: list[str] = Field(description='List of currency codes')
	fallback: bool = Field(False, description='True when the built-in list was served')

	model_config = ConfigDict(
		json_schema_extra={
			'examples': [{'currencies': ['USD', 'EUR', 'GBP', 'JPY'], 'fallback': False}]
		}
	)


class TotalResponse(BaseModel):
	ok: bool = Field(..., description='False when any item could not be converted')
	target_currency: str = Field(..., description='Currency of the total')
	total: float | None = Field(None, description='Signed sum, absent on failure')
	detail: str | None = Field(None, description='Failure description')
