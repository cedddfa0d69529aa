"""
hijricalc.engines.month_cache
-----------------------------
True month starts for the astronomical calendar.

Month index n counts lunations from the Hijra (n = 12*(year-1) + month).
Its start is found by walking day by day from the mean estimate until the
moon age at midnight UTC changes sign:

  - age >= 0 at the estimate: step back while age stays >= 0,
  - age <  0 at the estimate: step forward while age stays < 0,

then report the day after the stopping point. The two directions stop on
different sides of the conjunction; this asymmetry is part of the
calendar's definition and is reproduced exactly.
"""

from __future__ import annotations

import logging
import math
import threading
from collections import OrderedDict
from typing import Callable, Dict, Optional, Union

from ..core.errors import ConvergenceError
from ..core.time import HIJRA_MILLIS, ONE_DAY_MILLIS

log = logging.getLogger(__name__)

SYNODIC_MONTH = 29.530588853  # mean synodic month, days

MoonAgeFn = Callable[[Union[int, float]], float]


class TrueMonthStartCache:
    """
    Memoizing month_index -> day number map.

    Lookups and inserts run under a lock; the search itself does not, so two
    threads may compute the same missing entry concurrently. Both arrive at
    the same value and the first insert wins.
    """

    def __init__(
        self,
        moon_age: MoonAgeFn,
        *,
        max_entries: Optional[int] = None,
        max_search_days: int = 60,
    ) -> None:
        self._moon_age = moon_age
        self.max_entries = max_entries
        self.max_search_days = max_search_days
        self._entries: "OrderedDict[int, int]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def true_month_start(self, month_index: int) -> int:
        month_index = int(month_index)
        with self._lock:
            cached = self._entries.get(month_index)
            if cached is not None:
                self.hits += 1
                if self.max_entries is not None:
                    self._entries.move_to_end(month_index)
                return cached
            self.misses += 1

        start = self._search(month_index)

        with self._lock:
            start = self._entries.setdefault(month_index, start)
            if self.max_entries is not None:
                self._entries.move_to_end(month_index)
                while len(self._entries) > self.max_entries:
                    self._entries.popitem(last=False)
        return start

    __call__ = true_month_start

    def _search(self, month_index: int) -> int:
        origin = HIJRA_MILLIS + math.floor(month_index * SYNODIC_MONTH) * ONE_DAY_MILLIS
        age = self._moon_age(origin)
        steps = 0

        if age >= 0:
            while True:
                origin -= ONE_DAY_MILLIS
                steps = self._check_steps(month_index, steps)
                if self._moon_age(origin) < 0:
                    break
        else:
            while True:
                origin += ONE_DAY_MILLIS
                steps = self._check_steps(month_index, steps)
                if self._moon_age(origin) >= 0:
                    break

        start = (origin - HIJRA_MILLIS) // ONE_DAY_MILLIS + 1
        log.debug("true month start %d -> day %d (%d steps, initial age %.3f)", month_index, start, steps, age)
        return int(start)

    def _check_steps(self, month_index: int, steps: int) -> int:
        steps += 1
        if steps > self.max_search_days:
            raise ConvergenceError(
                f"month {month_index}: no change of moon-age sign within {self.max_search_days} days"
            )
        return steps

    def snapshot(self) -> Dict[int, int]:
        with self._lock:
            return dict(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, month_index: object) -> bool:
        with self._lock:
            return month_index in self._entries

    def __repr__(self) -> str:
        return (
            f"TrueMonthStartCache(entries={len(self)}, max_entries={self.max_entries}, "
            f"hits={self.hits}, misses={self.misses})"
        )
