#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Off-target hits grouped by mismatch count.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Tuple

# Set up module logger
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Hit:
    """
    A validated off-target site.

    Attributes:
        position: 1-based start of the guide-length window in its sequence
        label: Chromosome or sequence name the hit came from
        sequence: Guide window + PAM with mismatched nucleotides in lower case
        mismatches: Number of mismatches against the guide
    """
    position: int
    label: str
    sequence: str
    mismatches: int

    @property
    def verbatim_sequence(self) -> str:
        """Sequence exactly as it appears in the genomic text."""
        return self.sequence.upper()


class ResultStore:
    """
    Additive collection of hits indexed by mismatch count.

    Holds one ordered list per mismatch count from 0 to the budget.
    Insertion order within a group is scan order. Hits cannot be removed
    or replaced once stored.

    Example:
        >>> store = ResultStore(2)
        >>> store.insert(1, Hit(10, "1", "ATgC", 1))
        >>> [(count, len(hits)) for count, hits in store.groups()]
        [(1, 1)]
    """

    def __init__(self, budget: int):
        if budget < 0:
            raise ValueError(f"Budget must be non-negative, got {budget}")
        self.budget = budget
        self._groups: List[List[Hit]] = [[] for _ in range(budget + 1)]

    def insert(self, mismatch_count: int, hit: Hit) -> None:
        """
        Append a hit to the group for its mismatch count.

        Raises:
            ValueError: If the count is outside 0..budget or disagrees with the hit
        """
        if not 0 <= mismatch_count <= self.budget:
            raise ValueError(f"Mismatch count {mismatch_count} outside 0..{self.budget}")
        if hit.mismatches != mismatch_count:
            raise ValueError(
                f"Hit has {hit.mismatches} mismatches but was inserted under {mismatch_count}"
            )
        self._groups[mismatch_count].append(hit)

    def groups(self) -> Iterator[Tuple[int, Tuple[Hit, ...]]]:
        """Yield (mismatch_count, hits) for non-empty groups in ascending order."""
        for count, hits in enumerate(self._groups):
            if hits:
                yield count, tuple(hits)

    # Name used by the presentation layer
    for_each_group_ascending = groups

    def get(self, mismatch_count: int) -> Tuple[Hit, ...]:
        """Hits with exactly ``mismatch_count`` mismatches (empty if none)."""
        if not 0 <= mismatch_count <= self.budget:
            return ()
        return tuple(self._groups[mismatch_count])

    def merge(self, other: 'ResultStore') -> 'ResultStore':
        """
        Append every group of ``other`` after this store's hits.

        Returns:
            self, to allow chaining

        Raises:
            ValueError: If ``other`` holds counts above this store's budget
        """
        for count, hits in other.groups():
            if count > self.budget:
                raise ValueError(f"Cannot merge mismatch count {count} into budget {self.budget}")
            self._groups[count].extend(hits)
        return self

    def to_records(self) -> List[Dict]:
        """Flatten hits into row dictionaries in presentation order."""
        return [
            {
                "Mismatches": hit.mismatches,
                "Chromosome": hit.label,
                "Position": hit.position,
                "Sequence": hit.sequence,
            }
            for _, hits in self.groups()
            for hit in hits
        ]

    def __iter__(self) -> Iterator[Hit]:
        for _, hits in self.groups():
            yield from hits

    def __len__(self):
        return sum(len(hits) for hits in self._groups)

    def __eq__(self, other):
        if not isinstance(other, ResultStore):
            return NotImplemented
        return self.budget == other.budget and self._groups == other._groups

    def __repr__(self):
        counts = ", ".join(f"{count}: {len(hits)}" for count, hits in self.groups())
        return f"ResultStore(budget={self.budget}, groups={{{counts}}})"
