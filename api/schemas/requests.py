from pydantic import BaseModel, ConfigDict, Field, field_validator


class LineItemRequest(BaseModel):
	amount: float = Field(..., allow_inf_nan=False)
	currency: str = Field(..., min_length=3, max_length=5)
	sign: float = Field(
		1.0, allow_inf_nan=False, description='Multiplier applied to the converted amount'
	)

	@field_validator('currency')
	@classmethod
	def uppercase_currency(cls, v: str):
		return v.upper()


class TotalRequest(BaseModel):
	target_currency: str = Field(..., min_length=3, max_length=5)
	items: list[LineItemRequest] = Field(default_factory=list)

	model_config = ConfigDict(
		json_schema_extra={
			'example': {
				'target_currency': 'USD',
				'items': [
					{'amount': 100.0, 'currency': 'USD', 'sign': 1},
					{'amount': 50.0, 'currency': 'EUR', 'sign': -1},
				],
			}
		}
	)

	@field_validator('target_currency')
	@classmethod
	def uppercase_currency(cls, v: str):
		return v.upper()
