#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Bounded-mismatch comparison for the offtarget search.

Contains functionality for:
1. Position-by-position comparison of a guide fragment against genomic text
2. Early termination once the mismatch budget is exceeded
3. Annotation of the genomic text with mismatched positions in lower case

The comparison runs from the 3' end of the fragment (the end adjacent to
the seed) back toward the 5' end. Any fixed scan order gives the same
mismatch count and the same mismatched positions.
"""

import logging
from typing import Optional, Tuple

# Import package modules
from ..config import Config, ConfigError

# Set up module logger
logger = logging.getLogger(__name__)


class MismatchAligner:
    """
    Compares equal-length sequences under a mismatch budget.

    Annotation reports what is actually present in the genomic text:
    mismatched positions keep the text nucleotide in lower case and matched
    positions are upper case. The guide's nucleotide is never substituted,
    so upper-casing the annotation restores the verbatim text.

    Attributes:
        budget: Maximum number of mismatches allowed

    Example:
        >>> aligner = MismatchAligner(1)
        >>> aligner.align("ATGCA", "ATGGA")
        (1, 'ATGgA')
        >>> aligner.align("ATGCA", "TTGGA") is None
        True
    """

    def __init__(self, budget: int):
        """
        Initialize the aligner with a mismatch budget.

        Args:
            budget: Maximum number of mismatches allowed

        Raises:
            ConfigError: If the budget is not an integer within the allowed range
        """
        if isinstance(budget, bool) or not isinstance(budget, int):
            raise ConfigError(f"Mismatch budget must be an integer, got {budget!r}")

        if not Config.MIN_MISMATCHES <= budget <= Config.MAX_MISMATCHES:
            error_msg = (f"Mismatch budget must be between {Config.MIN_MISMATCHES} and "
                         f"{Config.MAX_MISMATCHES}, got {budget}")
            logger.error(error_msg)
            raise ConfigError(error_msg)

        self.budget = budget

    def align(self, query_fragment: str, candidate_window: str) -> Optional[Tuple[int, str]]:
        """
        Align a guide fragment against a candidate window of equal length.

        Args:
            query_fragment: Guide nucleotides (upper case)
            candidate_window: Genomic text of the same length

        Returns:
            Tuple of (mismatch_count, annotated_window), or None if the
            mismatch count exceeds the budget

        Raises:
            ValueError: If the two sequences differ in length
        """
        length = len(query_fragment)
        if len(candidate_window) != length:
            raise ValueError(
                f"Fragment and window lengths differ: {length} != {len(candidate_window)}"
            )

        mismatches = 0
        annotated = [''] * length

        for i in range(length - 1, -1, -1):
            base = candidate_window[i]
            if base == query_fragment[i]:
                annotated[i] = base
            else:
                mismatches += 1
                if mismatches > self.budget:
                    return None
                annotated[i] = base.lower()

        return mismatches, ''.join(annotated)
