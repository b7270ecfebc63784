"""
Core search modules for the offtarget pipeline.

This subpackage contains the seed-and-extend search engine:
- motif_matcher: PAM pattern matching with IUPAC wildcards
- mismatch_aligner: Bounded-mismatch comparison and annotation
- seed_scanner: Exact seed scanning with PAM filtering
- off_target_search: Search orchestration across sequences
- result_store: Hits grouped by mismatch count
"""

__all__ = [
    'IUPAC_SYMBOLS',
    'MotifMatcher',
    'MismatchAligner',
    'SeedScanner',
    'OffTargetSearch',
    'find_off_targets',
    'Hit',
    'ResultStore',
]

from .motif_matcher import IUPAC_SYMBOLS, MotifMatcher
from .mismatch_aligner import MismatchAligner
from .seed_scanner import SeedScanner
from .off_target_search import OffTargetSearch, find_off_targets
from .result_store import Hit, ResultStore
