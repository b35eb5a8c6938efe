"""Cron-driven scheduling of sync runs."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from typing import Any

from croniter import croniter

from restic_sync.core.contracts.exceptions import ConfigError

_LOG = logging.getLogger(__name__)


def to_croniter_expression(expression: str) -> str:
    """Translate a cron expression into croniter's field order.

    Five fields are standard minute-first cron. Six fields are seconds-first
    (``sec min hour dom month dow``); croniter expects the seconds field last.
    Numeric day-of-week follows croniter: 0 or 7 is Sunday, 1 is Monday. Day
    names (``SUN``, ``MON-FRI``) read the same under every cron dialect.
    """
    fields = expression.split()
    if len(fields) == 5:
        return " ".join(fields)
    if len(fields) == 6:
        return " ".join([*fields[1:], fields[0]])
    raise ConfigError(f"cron expression must have 5 or 6 fields, got {len(fields)}: {expression!r}")


def validate_cron_expression(expression: str) -> str:
    translated = to_croniter_expression(expression)
    if not croniter.is_valid(translated):
        raise ConfigError(f"invalid cron expression: {expression!r}")
    return expression


class CronSchedule:
    """Fire times of a cron expression, evaluated in UTC."""

    def __init__(self, expression: str) -> None:
        validate_cron_expression(expression)
        self.expression = expression
        self._croniter_expression = to_croniter_expression(expression)

    def next_after(self, moment: datetime) -> datetime:
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return croniter(self._croniter_expression, moment).get_next(datetime)


async def run_scheduled(
    job: Callable[[], Awaitable[Any]],
    schedule: CronSchedule,
    *,
    stop_event: asyncio.Event,
    clock: Callable[[], datetime] | None = None,
) -> None:
    """Run *job* at every fire time of *schedule* until *stop_event* is set.

    Runs never overlap: the next fire time is computed once the previous run
    has finished, so ticks that pass during a run are skipped. A failing run is
    logged and the loop waits for the next tick.
    """
    now = clock or (lambda: datetime.now(timezone.utc))
    _LOG.info("Starting scheduled sync with cron: %s", schedule.expression)

    while not stop_event.is_set():
        fire_at = schedule.next_after(now())
        delay = max(0.0, (fire_at - now()).total_seconds())
        _LOG.debug("Next sync at %s", fire_at.isoformat())
        try:
            await asyncio.wait_for(stop_event.wait(), timeout=delay)
        except TimeoutError:
            pass
        if stop_event.is_set():
            break

        _LOG.info("Running scheduled sync (%s)", fire_at.isoformat())
        try:
            await job()
        except Exception as exc:
            _LOG.warning("Scheduled sync failed: %s", exc, exc_info=_LOG.isEnabledFor(logging.DEBUG))

    _LOG.info("Shutting down scheduled sync...")
