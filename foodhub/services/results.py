import logging
from typing import Type, TypeVar
from foodhub.core.exceptions import OrderServiceError
from foodhub.schemas.response import CoreOutput

log = logging.getLogger("services")

OutputT = TypeVar("OutputT", bound=CoreOutput)


def failure(output_cls: Type[OutputT], exc: Exception, fallback: str) -> OutputT:
    """Turns any exception into an `ok=False` result. Domain errors keep their message."""
    if isinstance(exc, OrderServiceError):
        # Expected rejections (not found, not allowed, conflict)
        log.warning(f"{output_cls.__name__}: {exc.code}: {exc.message}")
        return output_cls(ok=False, error=exc.message, code=exc.code)
    log.exception(f"{output_cls.__name__}: unexpected error: {exc}")
    return output_cls(ok=False, error=fallback, code=OrderServiceError.code)
