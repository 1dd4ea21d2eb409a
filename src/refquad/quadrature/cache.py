"""Thread-safe cache of quadrature rules.

Rules are built on the first request and shared afterwards; entries are never
removed or modified. A short lock guards the index only, while every key owns a
lock serializing its construction. Requests for other keys issued by a running
construction (e.g., for the base rule of a composed rule) thus proceed
independently.

"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Hashable

import refquad

logger = logging.getLogger(__name__)


class QuadratureRuleCache:
    """Order keyed store of quadrature rules with build-once semantics.

    Example:

    cache = QuadratureRuleCache()
    rule = cache.get(key, builder)  # builder(key) is called at most once per key

    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        """Name used in log messages."""

        self.builds = 0
        """Number of invocations of builders, successful or not."""

        self._rules: dict[Hashable, refquad.QuadratureRule] = {}
        self._build_locks: dict[Hashable, threading.Lock] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._rules)

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._rules

    def get(
        self,
        key: Hashable,
        builder: Callable[[Hashable], refquad.QuadratureRule],
    ) -> refquad.QuadratureRule:
        """Return the rule stored for a key, build and store it on a miss.

        Concurrent requests for the same key wait for the running construction and
        receive the same object. If the builder raises, nothing is stored, the
        exception propagates unchanged, and the next request builds again.

        Args:
            key (hashable): identifier of the rule.
            builder (Callable): function of the key returning the rule.

        Returns:
            QuadratureRule: shared rule.

        """
        with self._lock:
            rule = self._rules.get(key)
            if rule is not None:
                logger.debug(f"Cache {self.name} hit for {key}.")
                return rule
            build_lock = self._build_locks.setdefault(key, threading.Lock())

        with build_lock:
            # Another thread may have finished the construction in the meantime
            with self._lock:
                rule = self._rules.get(key)
            if rule is not None:
                logger.debug(f"Cache {self.name} hit for {key} after waiting.")
                return rule

            logger.debug(f"Cache {self.name} miss for {key}.")
            with self._lock:
                self.builds += 1
            rule = builder(key)

            with self._lock:
                self._rules[key] = rule
                self._build_locks.pop(key, None)

        return rule
