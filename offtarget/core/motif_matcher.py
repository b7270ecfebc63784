#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
PAM motif matching for the offtarget search.

Checks whether a fixed-length window of genomic text satisfies a
wildcard-encoded PAM pattern and reconstructs the concrete nucleotides
found there (e.g. pattern ``NGG`` against window ``AGG`` yields ``AGG``).
"""

import logging
from types import MappingProxyType
from typing import Mapping, Optional, FrozenSet

# Import package modules
from ..config import MotifPatternError

# Set up module logger
logger = logging.getLogger(__name__)


# IUPAC symbols accepted in PAM patterns and the nucleotides each one allows
IUPAC_SYMBOLS: Mapping[str, FrozenSet[str]] = MappingProxyType({
    'A': frozenset('A'),
    'T': frozenset('T'),
    'G': frozenset('G'),
    'C': frozenset('C'),
    'N': frozenset('ATGC'),
    'R': frozenset('AG'),
    'W': frozenset('AT'),
    'V': frozenset('GCA'),
    'Y': frozenset('CT'),
    'M': frozenset('AC'),
})


class MotifMatcher:
    """
    Matches text windows against a wildcard-encoded PAM pattern.

    The pattern is validated once at construction; every symbol must be
    present in the symbol table. Matching itself never raises.

    Attributes:
        pattern: Upper-case PAM pattern
        allowed: Per-position sets of allowed nucleotides

    Example:
        >>> matcher = MotifMatcher("NGG")
        >>> matcher.match("AGG")
        'AGG'
        >>> matcher.match("AAG") is None
        True
    """

    def __init__(self, pattern: str, symbol_table: Mapping[str, FrozenSet[str]] = IUPAC_SYMBOLS):
        """
        Initialize the matcher and validate the pattern.

        Args:
            pattern: PAM pattern such as "NGG" or "NNGRRT"
            symbol_table: Mapping from pattern symbol to allowed nucleotides

        Raises:
            MotifPatternError: If the pattern is empty or has unknown symbols
        """
        if not isinstance(pattern, str) or not pattern:
            error_msg = f"PAM pattern must be a non-empty string, got {pattern!r}"
            logger.error(error_msg)
            raise MotifPatternError(error_msg)

        self.pattern = pattern.upper()

        unknown = sorted(set(self.pattern) - set(symbol_table))
        if unknown:
            error_msg = f"Unknown symbols in PAM pattern {self.pattern}: {', '.join(unknown)}"
            logger.error(error_msg)
            raise MotifPatternError(error_msg)

        self.allowed = tuple(symbol_table[symbol] for symbol in self.pattern)
        logger.debug(f"MotifMatcher initialized for pattern {self.pattern}")

    def __len__(self):
        return len(self.pattern)

    def __repr__(self):
        return f"MotifMatcher({self.pattern!r})"

    def match(self, window: str) -> Optional[str]:
        """
        Match a text window against the pattern.

        Stops at the first position that violates its allowed set. A window
        shorter than the pattern (end of sequence) never matches.

        Args:
            window: Text of at least len(pattern) characters; extra
                characters beyond the pattern length are ignored

        Returns:
            The concrete matched nucleotides, or None if the window fails
        """
        if len(window) < len(self.allowed):
            return None

        for i, allowed in enumerate(self.allowed):
            if window[i] not in allowed:
                return None

        return window[:len(self.allowed)]
