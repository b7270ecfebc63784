#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Seed scanning for the offtarget search.

Finds every exact occurrence of the seed (the last few nucleotides at the
3' end of the guide) in a sequence and keeps those immediately followed by
a valid PAM. Only these candidates go on to the more expensive mismatch
comparison.

COORDINATE SYSTEM:
- Yielded positions are 0-based offsets of the seed's first nucleotide
"""

import logging
from typing import Iterator, Tuple

# Import package modules
from .motif_matcher import MotifMatcher

# Set up module logger
logger = logging.getLogger(__name__)


class SeedScanner:
    """
    Scans a sequence for seed occurrences followed by a valid PAM.

    Attributes:
        seed: Exact-match anchor taken from the 3' end of the guide
        motif_matcher: Matcher for the PAM window following the seed

    Example:
        >>> scanner = SeedScanner("TGC", MotifMatcher("NGG"))
        >>> list(scanner.scan("AATGCAGGTT"))
        [(2, 'AGG')]
    """

    def __init__(self, seed: str, motif_matcher: MotifMatcher):
        if not seed:
            raise ValueError("Seed must be a non-empty string")
        self.seed = seed
        self.motif_matcher = motif_matcher

    def scan(self, text: str) -> Iterator[Tuple[int, str]]:
        """
        Lazily yield (position, concrete_pam) for each seed hit with a valid PAM.

        Overlapping seed occurrences are all reported. Candidates whose PAM
        window runs past the end of the text are skipped.

        Args:
            text: Upper-case nucleotide sequence

        Yields:
            Tuples of (0-based seed position, matched PAM nucleotides)
        """
        seed = self.seed
        seed_length = len(seed)
        pam_length = len(self.motif_matcher)
        last_start = len(text) - seed_length - pam_length
        if last_start < 0:
            return

        position = text.find(seed, 0, last_start + seed_length)
        while position != -1:
            pam_start = position + seed_length
            concrete_pam = self.motif_matcher.match(text[pam_start:pam_start + pam_length])
            if concrete_pam is not None:
                yield position, concrete_pam
            position = text.find(seed, position + 1, last_start + seed_length)
