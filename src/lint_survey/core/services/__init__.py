from __future__ import annotations

from .aggregator import Aggregator, rank_counts
from .discovery import DiscoveryService
from .enrichment import MetadataEnricher
from .repository_processor import RepositoryProcessor
from .scheduler import BatchScheduler, plan_super_batches

__all__ = [
    "Aggregator",
    "rank_counts",
    "DiscoveryService",
    "MetadataEnricher",
    "RepositoryProcessor",
    "BatchScheduler",
    "plan_super_batches",
]
