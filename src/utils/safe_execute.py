"""Error handling helpers for fetch boundaries that degrade gracefully.

Every lookup in the finder catches its own failures, logs them and falls back
to an empty result. These helpers keep that try/except/log pattern in one place.
"""

from typing import Any, Awaitable, Mapping, Optional, Tuple, Type

from src.utils.logger import logger


def log_error(
    operation_name: str,
    exception: BaseException,
    log_level: str = "warning",
    extra: Optional[Mapping[str, Any]] = None,
) -> None:
    """Log error with appropriate level.

    Args:
        operation_name: Description for logging
        exception: Exception that occurred
        log_level: Logging level ("debug", "warning", "error"). Default: "warning".
        extra: Lookup context (generation, query, recipe_id) for structured output.
    """
    msg = f"{operation_name}: {exception}"
    if log_level == "debug":
        logger.debug(msg, extra=extra)
    elif log_level == "error":
        logger.error(msg, extra=extra)
    else:
        logger.warning(msg, extra=extra)


async def safe_execute_async(
    coro: Awaitable[Any],
    operation_name: str,
    log_level: str = "warning",
    default_return: Any = None,
    exceptions: Tuple[Type[BaseException], ...] = (Exception,),
) -> Any:
    """Await a coroutine, logging and suppressing the listed exceptions.

    Args:
        coro: Awaitable to execute.
        operation_name: Description for logging (e.g., "Autocomplete lookup").
        log_level: Logging level ("debug", "warning", "error"). Default: "warning".
        default_return: Value returned when one of `exceptions` is raised.
        exceptions: Exception types treated as a failed fetch. Anything else
            propagates.

    Returns:
        Result of the coroutine, or default_return on a handled failure.

    Example:
        suggestions = await safe_execute_async(
            client.autocomplete_ingredients("tom"),
            "Autocomplete lookup",
            default_return=[],
            exceptions=(SpoonacularError,),
        )
    """
    try:
        return await coro
    except exceptions as e:
        log_error(operation_name, e, log_level)
        return default_return
