"""
Wakeup reason aggregation.

Groups occurrences by reason label and totals the energy attributed to
each reason. A sample shared by several occurrences of the same reason
(e.g. the ramp between two back-to-back wakeups) is counted once for that
reason; different reasons may each count the same sample.
"""

import logging

from wakepower.analysis.types import (
    MatchedRange,
    Occurrence,
    ReasonEnergy,
    ReasonRecord,
)
from wakepower.models.timeline import PowerSample

logger = logging.getLogger(__name__)


def deduplicated_energy(
    ranges: list[MatchedRange | None], samples: list[PowerSample]
) -> float:
    """
    Calculate energy over the distinct samples referenced by a set of ranges.

    Args:
        ranges: Matched ranges (None slots are ignored)
        samples: Full power trace, indexed by MatchedRange.sample_indices

    Returns:
        Energy in mAh
    """
    distinct: set[int] = set()
    for matched in ranges:
        if matched is not None:
            distinct.update(matched.sample_indices)

    return sum(samples[i].energy_mah for i in sorted(distinct))


class ReasonAggregator:
    """
    Groups occurrences by wakeup reason.

    Labels keep first-seen order, which also breaks ties in the energy
    ranking.

    Example:
        >>> aggregator = ReasonAggregator(samples)
        >>> records = aggregator.aggregate(occurrences, matches)
        >>> ranking = aggregator.rank(records)
    """

    def __init__(self, samples: list[PowerSample]):
        """
        Initialize aggregator.

        Args:
            samples: Full power trace
        """
        self.samples = samples

    def aggregate(
        self,
        occurrences: list[Occurrence],
        matches: dict[int, MatchedRange | None],
    ) -> dict[str, ReasonRecord]:
        """
        Build one record per reason label.

        Args:
            occurrences: Occurrences in input order
            matches: Event index -> matched range (None = no power data)

        Returns:
            Label -> ReasonRecord, in first-seen label order
        """
        grouped: dict[str, list[MatchedRange | None]] = {}
        for occurrence in occurrences:
            grouped.setdefault(occurrence.label, []).append(
                matches.get(occurrence.event_index)
            )

        records = {
            label: ReasonRecord(
                label=label,
                ranges=ranges,
                energy_mah=deduplicated_energy(ranges, self.samples),
                first_seen=order,
            )
            for order, (label, ranges) in enumerate(grouped.items())
        }

        logger.debug(
            f"Aggregated {len(occurrences)} occurrences into {len(records)} reasons"
        )
        return records

    @staticmethod
    def rank(records: dict[str, ReasonRecord]) -> list[ReasonEnergy]:
        """
        Rank reasons by descending energy.

        Args:
            records: Label -> ReasonRecord, in first-seen order

        Returns:
            Ranking; equal energies keep first-seen order
        """
        ordered = sorted(
            records.values(),
            key=lambda record: (-record.energy_mah, record.first_seen),
        )
        return [
            ReasonEnergy(label=record.label, energy_mah=record.energy_mah)
            for record in ordered
        ]
