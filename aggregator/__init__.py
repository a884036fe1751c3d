"""Pull request aggregation across repositories."""

from aggregator.aggregator import RepositoryAggregator, aggregate
from aggregator.enricher import PullRequestEnricher

__all__ = [
    "PullRequestEnricher",
    "RepositoryAggregator",
    "aggregate",
]
