"""Primitive numeric pipelines.

``NumericPipeline`` is the numbers-only counterpart of QueryPipeline: every
element is an int or float, and the terminals are arithmetic summaries.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from contracts.optional_value import OptionalValue
from contracts.query_contracts import AbsentPolicy, as_number, require

from ._common import BasePipeline, mean_of, resolve_live, source_reader


@dataclass(frozen=True)
class SummaryStatistics:
    """count/sum/min/max/average in one pass.

    An empty summary has count 0, sum 0 and average 0.0; min and max are None
    because there is no value to report.
    """
    count: int = 0
    sum: float | int = 0
    min: float | int | None = None
    max: float | int | None = None

    @property
    def average(self) -> float:
        return self.sum / self.count if self.count else 0.0

    @classmethod
    def of(cls, values: Iterable[Any]) -> SummaryStatistics:
        nums = [as_number(v) for v in values]
        if not nums:
            return cls()
        total: float | int = sum(nums) if all(isinstance(n, int) for n in nums) else math.fsum(nums)
        return cls(count=len(nums), sum=total, min=min(nums), max=max(nums))


class NumericPipeline(BasePipeline):
    """Single-use pipeline over numbers."""

    @classmethod
    def of(cls, values: Iterable[Any], *, live: bool | None = None) -> NumericPipeline:
        require(values, "values")
        is_live = resolve_live(live)
        return cls(source_reader(values, live=is_live), live=is_live)

    def _numbers(self, op: str) -> list[float | int]:
        return [as_number(v) for v in self._evaluate(op)]

    def sum(self) -> float | int:
        nums = self._numbers("sum")
        if all(isinstance(n, int) for n in nums):
            return sum(nums)
        return math.fsum(nums)

    def average(
        self,
        *,
        on_empty: AbsentPolicy | str | None = None,
        default: float | None = None,
    ) -> OptionalValue[float]:
        if on_empty is not None:
            on_empty = AbsentPolicy.parse(on_empty)
        return mean_of(self._numbers("average"), on_empty=on_empty, default=default)

    def min(self) -> OptionalValue[float | int]:
        nums = self._numbers("min")
        return OptionalValue.of(min(nums)) if nums else OptionalValue.empty()

    def max(self) -> OptionalValue[float | int]:
        nums = self._numbers("max")
        return OptionalValue.of(max(nums)) if nums else OptionalValue.empty()

    def summary_statistics(self) -> SummaryStatistics:
        return SummaryStatistics.of(self._evaluate("summary_statistics"))
