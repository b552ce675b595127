"""Intent/failure logging shared by the controllers."""
import logging
from contextlib import contextmanager

from backend.errors import HttpError


@contextmanager
def logged_operation(logger: logging.Logger, description: str, **context):
    """
    Log what is about to happen, and log (then re-raise) anything that goes wrong.

    Failures are logged as one line naming the operation. The traceback of an
    unexpected error is logged once, by format_error_response at the handler.
    """
    logger.info(description, extra=context)
    try:
        yield
    except HttpError as e:
        logger.warning(f"{description} failed: {e.message}", extra={**context, "status": e.status})
        raise
    except Exception as e:
        logger.error(
            f"{description} failed",
            extra={**context, "errorType": type(e).__name__, "reason": str(e)},
        )
        raise
