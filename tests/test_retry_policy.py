import pytest

from application.services import RetryPolicy
from core.logging import get_logger

logger = get_logger(__name__)


async def test_returns_first_success():
    attempts = []

    async def supplier():
        attempts.append(1)
        if len(attempts) < 2:
            raise ValueError("not yet")
        return "ok"

    assert await RetryPolicy.fixed(3, 0).run(supplier, logger=logger) == "ok"
    assert len(attempts) == 2


async def test_reraises_after_last_attempt():
    attempts = []

    async def supplier():
        attempts.append(1)
        raise ValueError("never")

    with pytest.raises(ValueError):
        await RetryPolicy.fixed(3, 0).run(supplier, logger=logger)
    assert len(attempts) == 3


async def test_terminal_errors_stop_early():
    attempts = []

    async def supplier():
        attempts.append(1)
        raise KeyError("fatal")

    with pytest.raises(KeyError):
        await RetryPolicy.fixed(5, 0).run(supplier, logger=logger, is_transient=lambda e: not isinstance(e, KeyError))
    assert len(attempts) == 1


def test_delays():
    assert RetryPolicy.fixed(3, 250).delay_ms(1) == 250
    assert RetryPolicy.fixed(3, 250).delay_ms(3) == 250
    assert RetryPolicy(max_attempts=4, backoff_base_ms=100, backoff_factor=2.0).delay_ms(3) == 400
    assert RetryPolicy.fixed(0, -5).max_attempts == 1
