"""
Per-link feature table.

One FeatureEntry per link eligible for speed-factor modeling.
"""

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, Optional, Tuple

from freespeed.errors import NetworkFormatError
from freespeed.shared.constants import FEATURE_COLUMNS
from .models import NetworkGraph

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeatureEntry:
    """Feature vector and junction type of one link."""
    junction_type: str
    features: Tuple[float, ...]


class FeatureTable:
    """Link id -> FeatureEntry."""

    def __init__(self, entries: Optional[Dict[str, FeatureEntry]] = None):
        self._entries: Dict[str, FeatureEntry] = dict(entries or {})

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, link_id: str) -> bool:
        return link_id in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def get(self, link_id: str) -> Optional[FeatureEntry]:
        return self._entries.get(link_id)

    def attach(self, graph: NetworkGraph) -> int:
        """
        Copy junction types onto the links of ``graph``.

        Returns:
            Number of links that received a junction type
        """
        n = 0
        for link in graph:
            entry = self._entries.get(link.id)
            if entry is not None:
                link.junction_type = entry.junction_type
                n += 1
        return n

    @classmethod
    def read_csv(cls, path: str | Path) -> "FeatureTable":
        """
        Read a feature CSV.

        Expects ``linkId`` and ``junction_type`` columns plus every
        column in FEATURE_COLUMNS; other columns are ignored.

        Raises:
            NetworkFormatError: If required columns are missing or a
                value is not numeric
        """
        path = Path(path)
        entries: Dict[str, FeatureEntry] = {}

        with open(path, newline="", encoding="utf-8") as f:
            reader = csv.DictReader(f)
            header = set(reader.fieldnames or [])
            missing = [
                c for c in ("linkId", "junction_type", *FEATURE_COLUMNS)
                if c not in header
            ]
            if missing:
                raise NetworkFormatError(f"Feature table {path} lacks columns: {missing}")

            for row in reader:
                try:
                    features = tuple(float(row[c]) for c in FEATURE_COLUMNS)
                except ValueError as e:
                    raise NetworkFormatError(
                        f"Non-numeric feature for link {row['linkId']}: {e}"
                    ) from e

                entries[row["linkId"]] = FeatureEntry(
                    junction_type=row["junction_type"],
                    features=features,
                )

        logger.info(f"Read {len(entries)} feature entries from {path}")
        return cls(entries)
