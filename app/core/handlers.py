import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from engine.exceptions import EngineError, InvalidEngineInputError

logger = logging.getLogger(__name__)


async def engine_exception_handler(request: Request, exc: EngineError):
    """
    Handles EngineError and its subclasses, returning a 400 or 500 HTTP response.
    """
    if isinstance(exc, InvalidEngineInputError):
        logger.warning(f"Rejected engine input: {exc.message}")
        status_code = status.HTTP_400_BAD_REQUEST
        detail = f"Invalid Input: {exc.message}"
    else:
        logger.error(f"EngineError caught: {exc.message}", exc_info=True)
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        detail = f"Calculation Error: {exc.message}"

    return JSONResponse(status_code=status_code, content={"detail": detail})
