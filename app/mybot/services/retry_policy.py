# -*- coding: utf-8 -*-
"""
@Desc    : Deep Translate retry state machine.

The transition function is pure; ``run_with_retry`` is the driver that performs
the provider call and the backoff wait, both injected so the loop can run
against a fake provider and a fake clock.
"""
import asyncio
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Awaitable, Callable, FrozenSet

from loguru import logger

from translators.errors import GenerativeProviderError


class RetryStatus(str, Enum):
    ATTEMPTING = "attempting"
    SUCCEEDED = "succeeded"
    RATE_LIMITED = "rate_limited"
    EXHAUSTED = "exhausted"
    FATAL = "fatal"

    @property
    def is_terminal(self) -> bool:
        return self is not RetryStatus.ATTEMPTING


class ErrorKind(str, Enum):
    RATE_LIMIT = "rate_limit"
    TRANSIENT = "transient"
    OTHER = "other"


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 3
    backoff_seconds: float = 2.0
    rate_limit_codes: FrozenSet[int] = frozenset({429})
    # 500 is treated as transient alongside 503
    transient_codes: FrozenSet[int] = frozenset({500, 503})

    def classify(self, error: BaseException) -> ErrorKind:
        status_code = getattr(error, "status_code", None)
        if not isinstance(error, GenerativeProviderError) or status_code is None:
            return ErrorKind.OTHER
        if status_code in self.rate_limit_codes:
            return ErrorKind.RATE_LIMIT
        if status_code in self.transient_codes:
            return ErrorKind.TRANSIENT
        return ErrorKind.OTHER


@dataclass(frozen=True)
class RetryState:
    status: RetryStatus = RetryStatus.ATTEMPTING
    attempts_made: int = 0
    last_error: ErrorKind | None = None
    result: str | None = None


@dataclass(frozen=True)
class Outcome:
    """Result of one provider attempt: either ``text`` or an ``error`` kind."""

    text: str | None = None
    error: ErrorKind | None = None


def next_state(state: RetryState, outcome: Outcome, policy: RetryPolicy) -> RetryState:
    if state.status.is_terminal:
        raise ValueError(f"No transition out of terminal state {state.status}")

    if outcome.error is None:
        return replace(state, status=RetryStatus.SUCCEEDED, result=outcome.text, last_error=None)

    # Rate limits are never retried, whatever budget is left
    if outcome.error is ErrorKind.RATE_LIMIT:
        return replace(state, status=RetryStatus.RATE_LIMITED, last_error=outcome.error)

    if outcome.error is ErrorKind.TRANSIENT:
        attempts_made = state.attempts_made + 1
        status = (
            RetryStatus.ATTEMPTING if attempts_made < policy.max_attempts else RetryStatus.EXHAUSTED
        )
        return replace(state, status=status, attempts_made=attempts_made, last_error=outcome.error)

    return replace(state, status=RetryStatus.FATAL, last_error=outcome.error)


@dataclass
class RetryRun:
    state: RetryState
    calls: int = 0
    waited: float = 0.0
    error: BaseException | None = field(default=None, repr=False)


async def run_with_retry(
    attempt: Callable[[], Awaitable[str]],
    *,
    policy: RetryPolicy,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> RetryRun:
    """
    Drive the state machine until it reaches a terminal state.

    A FATAL error is re-raised to the caller; every other terminal state is
    returned so the caller can pick the reply.
    """
    run = RetryRun(state=RetryState())

    while not run.state.status.is_terminal:
        run.calls += 1
        try:
            outcome = Outcome(text=await attempt())
        except Exception as err:
            kind = policy.classify(err)
            run.error = err
            outcome = Outcome(error=kind)

        run.state = next_state(run.state, outcome, policy)

        status = run.state.status
        if status is RetryStatus.ATTEMPTING:
            logger.warning(
                f"Deep Translate 服务暂时不可用，{policy.backoff_seconds}s 后重试 "
                f"({run.state.attempts_made}/{policy.max_attempts}) - {run.error!r}"
            )
            await sleep(policy.backoff_seconds)
            run.waited += policy.backoff_seconds
        elif status is RetryStatus.RATE_LIMITED:
            logger.warning(f"Deep Translate 达到调用配额上限 - {run.error!r}")
        elif status is RetryStatus.EXHAUSTED:
            logger.error(f"Deep Translate 重试 {run.state.attempts_made} 次后仍失败")
        elif status is RetryStatus.FATAL:
            raise run.error

    return run
