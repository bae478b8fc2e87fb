"""Results of read operations, tagged with where the data came from.

Callers must branch on the variant: ``Live`` holds backend data, ``Degraded``
holds whatever could be offered instead (usually nothing) and the reason.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Union

from ..core.exceptions import StoreError


@dataclass(frozen=True)
class Live:
    items: list = field(default_factory=list)

    is_degraded = False
    reason = None


@dataclass(frozen=True)
class Degraded:
    items: list = field(default_factory=list)
    reason: str = ""
    error: Optional[StoreError] = None

    is_degraded = True


DataResult = Union[Live, Degraded]


def map_items(result: DataResult, fn: Callable) -> DataResult:
    items = [fn(item) for item in result.items]
    if isinstance(result, Degraded):
        return Degraded(items=items, reason=result.reason, error=result.error)
    return Live(items=items)


def keep_items(result: DataResult, predicate: Callable) -> DataResult:
    items = [item for item in result.items if predicate(item)]
    if isinstance(result, Degraded):
        return Degraded(items=items, reason=result.reason, error=result.error)
    return Live(items=items)
