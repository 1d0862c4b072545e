"""
Validation set built from measured travel times.

Raw sources are CSV files with one travel-time sample per row. The
target speed of an origin/destination pair is the mean of every
free-flow-hour sample across all sources.
"""

import csv
import logging
from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from statistics import fmean
from typing import Dict, Iterable, Iterator, List, Tuple

from freespeed.errors import EmptyValidationSampleError, NetworkFormatError
from freespeed.shared.constants import FREE_FLOW_HOURS

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("from_node", "to_node", "hour", "dist", "travel_time")


@dataclass(frozen=True)
class FromToNodes:
    """Origin/destination node pair."""
    from_node: str
    to_node: str


@dataclass(frozen=True)
class ValidationSample:
    """Observed free-flow speed between two nodes."""
    from_node: str
    to_node: str
    target_speed: float  # m/s


# pair -> hour -> speeds (m/s)
RawSamples = Dict[FromToNodes, Dict[int, List[float]]]


def read_raw_samples(paths: Iterable[str | Path]) -> RawSamples:
    """
    Read per-hour speed samples from validation source files.

    Pairs keep the order of their first appearance.
    Rows with non-positive distance or travel time are skipped.
    """
    entries: RawSamples = {}
    skipped = 0

    for path in paths:
        path = Path(path)
        with open(path, newline="", encoding="utf-8") as f:
            reader = csv.DictReader(f)
            missing = [c for c in REQUIRED_COLUMNS if c not in (reader.fieldnames or [])]
            if missing:
                raise NetworkFormatError(f"Validation file {path} lacks columns: {missing}")

            for row in reader:
                try:
                    hour = int(float(row["hour"]))
                    dist = float(row["dist"])
                    travel_time = float(row["travel_time"])
                except ValueError as e:
                    raise NetworkFormatError(f"Invalid validation row in {path}: {e}") from e

                if dist <= 0 or travel_time <= 0:
                    skipped += 1
                    continue

                key = FromToNodes(row["from_node"], row["to_node"])
                per_hour = entries.setdefault(key, defaultdict(list))
                per_hour[hour].append(dist / travel_time)

    if skipped:
        logger.warning(
            f"Skipped {skipped} validation rows with non-positive distance or travel time"
        )

    return entries


def target_speed(per_hour: Dict[int, List[float]]) -> float:
    """
    Mean of all samples recorded at the free-flow hours.

    Raises:
        ValueError: If there are no such samples
    """
    values = [v for hour in FREE_FLOW_HOURS for v in per_hour.get(hour, [])]
    if not values:
        raise ValueError("no free-flow samples")
    return fmean(values)


class ValidationSet:
    """Ordered collection of validation samples, one per node pair."""

    def __init__(self, samples: Iterable[ValidationSample] = ()):
        self._samples: List[ValidationSample] = []
        seen = set()
        for s in samples:
            key = (s.from_node, s.to_node)
            if key in seen:
                raise ValueError(f"Duplicate validation pair: {key}")
            seen.add(key)
            self._samples.append(s)

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[ValidationSample]:
        return iter(self._samples)

    def pairs(self) -> List[Tuple[str, str]]:
        return [(s.from_node, s.to_node) for s in self._samples]

    @classmethod
    def from_raw(cls, entries: RawSamples) -> "ValidationSet":
        """
        Build target speeds from raw per-hour samples.

        Raises:
            EmptyValidationSampleError: If a pair has no free-flow samples
        """
        samples = []
        for key, per_hour in entries.items():
            try:
                speed = target_speed(per_hour)
            except ValueError:
                raise EmptyValidationSampleError(
                    f"No samples at hours {FREE_FLOW_HOURS} for "
                    f"{key.from_node} -> {key.to_node}"
                ) from None

            samples.append(ValidationSample(key.from_node, key.to_node, speed))

        return cls(samples)

    @classmethod
    def read(cls, paths: Iterable[str | Path]) -> "ValidationSet":
        """Read and combine validation source files."""
        paths = list(paths)
        result = cls.from_raw(read_raw_samples(paths))
        logger.info(f"Read {len(result)} validation pairs from {len(paths)} files")
        return result
