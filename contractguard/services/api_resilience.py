"""
Circuit breaker for the model provider.

After repeated upstream failures the breaker opens and further analysis
requests fail fast with ``GatewayError`` instead of waiting on a provider
that is down. This is not a retry policy: every request still makes at most
one upstream call.
"""

from typing import Any, Callable

import structlog
from pybreaker import CircuitBreaker, CircuitBreakerError, CircuitBreakerListener

from ..errors import GatewayError

logger = structlog.get_logger()


class LoggingCircuitBreakerListener(CircuitBreakerListener):
    """Logs breaker state changes and counted failures."""

    def state_change(self, cb, old_state, new_state):
        logger.warning(
            "circuit_breaker_state_change",
            breaker=cb.name,
            old_state=str(old_state),
            new_state=str(new_state)
        )

    def failure(self, cb, exc):
        logger.debug(
            "circuit_breaker_failure",
            breaker=cb.name,
            error=str(exc),
            fail_counter=cb.fail_counter
        )


model_breaker = CircuitBreaker(
    fail_max=5,           # Open after 5 consecutive failures
    reset_timeout=60,     # Allow a trial call after 60 seconds
    name="model_provider",
    listeners=[LoggingCircuitBreakerListener()]
)


def call_through_breaker(breaker: CircuitBreaker, func: Callable, *args, **kwargs) -> Any:
    """
    Call a blocking function through ``breaker``.

    Exceptions raised by ``func`` propagate unchanged (and are counted by the
    breaker). An open breaker surfaces as ``GatewayError``.

    Usage:
        response = await asyncio.to_thread(
            call_through_breaker, model_breaker, model.generate_content, prompt
        )
    """
    try:
        return breaker.call(func, *args, **kwargs)
    except CircuitBreakerError as e:
        logger.error("circuit_breaker_open", breaker=breaker.name)
        raise GatewayError(f"{breaker.name} is temporarily unavailable") from e


def get_breaker_status(breaker: CircuitBreaker) -> dict:
    """Current state and counters of ``breaker``."""
    return {
        "name": breaker.name,
        "state": str(breaker.current_state),
        "fail_counter": breaker.fail_counter,
        "fail_max": breaker.fail_max,
        "reset_timeout": breaker.reset_timeout,
    }
