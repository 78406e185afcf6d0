import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from domain.exceptions.currency import (
	DecodingFailureError,
	InvalidRequestError,
	NetworkFailureError,
	RateNotFoundError,
)

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
	@app.exception_handler(InvalidRequestError)
	async def invalid_request_handler(request: Request, exc: InvalidRequestError):
		return JSONResponse(status_code=400, content={'detail': str(exc)})

	@app.exception_handler(RateNotFoundError)
	async def rate_not_found_handler(request: Request, exc: RateNotFoundError):
		return JSONResponse(status_code=404, content={'detail': str(exc)})

	@app.exception_handler(DecodingFailureError)
	async def decoding_failure_handler(request: Request, exc: DecodingFailureError):
		logger.error(f'Decoding failure: {exc}')
		return JSONResponse(
			status_code=502, content={'detail': 'Exchange rate source returned invalid data'}
		)

	@app.exception_handler(NetworkFailureError)
	async def network_failure_handler(request: Request, exc: NetworkFailureError):
		logger.error(f'Network failure: {exc} (cause: {exc.__cause__})')
		return JSONResponse(
			status_code=503, content={'detail': 'Exchange rate service unavailable'}
		)
