"""Declarative query pipelines over in-memory collections."""

from pipeline.query import collectors
from pipeline.query._common import PipelineState
from pipeline.query.collectors import Collector
from pipeline.query.engine import QueryPipeline
from pipeline.query.numeric import NumericPipeline, SummaryStatistics

__all__ = [
    "Collector",
    "NumericPipeline",
    "PipelineState",
    "QueryPipeline",
    "SummaryStatistics",
    "collectors",
]
