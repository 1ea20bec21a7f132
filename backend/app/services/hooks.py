"""Runner for post-commit side effects whose failure must not fail the operation."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class HookOutcome:
    label: str
    succeeded: bool
    error: str | None = None

    @property
    def warning(self) -> str | None:
        if self.succeeded:
            return None
        return f"{self.label} failed: {self.error}"


async def run_best_effort(
    label: str, fn: Callable[..., Any], *args: Any, **kwargs: Any
) -> HookOutcome:
    """Run ``fn`` after the state change has been committed.

    Coroutine results are awaited. Exceptions are logged and captured in the
    returned outcome; a callable returning ``False`` counts as a failure too
    (email senders report undeliverable messages that way).
    """
    try:
        result = fn(*args, **kwargs)
        if inspect.isawaitable(result):
            result = await result
    except Exception as exc:
        logger.exception("Best-effort hook %s failed", label)
        return HookOutcome(label=label, succeeded=False, error=str(exc) or type(exc).__name__)

    if result is False:
        logger.warning("Best-effort hook %s reported failure", label)
        return HookOutcome(label=label, succeeded=False, error="not delivered")
    return HookOutcome(label=label, succeeded=True)


def hook_warnings(*outcomes: HookOutcome) -> list[str]:
    """Warnings for the hooks that failed, in the order they ran."""
    return [outcome.warning for outcome in outcomes if outcome.warning]
