"""
Listing parameters.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


@dataclass(frozen=True)
class ListingParams:
    limit: int
    order: SortDirection


@dataclass(frozen=True)
class ListingDefaults:
    limit: int
    order: SortDirection


MOST_OBSERVED = ListingDefaults(limit=7, order=SortDirection.ASC)
MOST_VISITED = ListingDefaults(limit=25, order=SortDirection.DESC)
ALIEN_INTERACTIONS = ListingDefaults(limit=25, order=SortDirection.ASC)
RECENT_ABDUCTIONS = ListingDefaults(limit=50, order=SortDirection.DESC)
