"""In-process change feed.

The HTTP layer publishes a :class:`ChangeEvent` after each successful write so
that subscribers (UI push, cache invalidation) can reload. Publishing is
fire-and-forget: a failing subscriber is logged and never affects the write
that triggered it. Services and the payroll engine do not import this module.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, DefaultDict, List

logger = logging.getLogger(__name__)

ALL_TABLES = "*"


@dataclass(frozen=True)
class ChangeEvent:
    table: str
    action: str
    key: str


Subscriber = Callable[[ChangeEvent], None]


class ChangeFeed:
    def __init__(self):
        self._subscribers: DefaultDict[str, List[Subscriber]] = defaultdict(list)

    def subscribe(self, table: str, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback`` for ``table`` (or ``"*"``); returns an unsubscribe function."""
        self._subscribers[table].append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers[table]:
                self._subscribers[table].remove(callback)

        return unsubscribe

    def publish(self, table: str, action: str, key: object) -> ChangeEvent:
        event = ChangeEvent(table=table, action=action, key=str(key))
        for callback in list(self._subscribers[table]) + list(self._subscribers[ALL_TABLES]):
            try:
                callback(event)
            except Exception:
                logger.exception("change subscriber failed for %s.%s", table, action)
        return event
