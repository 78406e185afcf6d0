class ConversionError(Exception):
	pass


class InvalidRequestError(ConversionError):
	pass


class NetworkFailureError(ConversionError):
	pass


class DecodingFailureError(ConversionError):
	pass


class RateNotFoundError(ConversionError):
	pass
