#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Off-target search orchestration.

Contains functionality for:
1. Seed-and-extend search of a single labelled sequence
2. Multi-sequence search (e.g. one call per chromosome) into one result set
3. Optional process-level parallelism across sequences with an ordered merge

Each candidate produced by the SeedScanner has its upstream window (the
guide length minus the seed) compared against the rest of the guide by the
MismatchAligner. Candidates too close to the start of a sequence are
skipped.

COORDINATE SYSTEM:
- Hit positions are 1-based starts of the guide-length window
"""

import logging
import threading
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Mapping, Optional

from tqdm import tqdm

# Import package modules
from ..config import Config, ConfigError, SearchError
from .motif_matcher import MotifMatcher
from .mismatch_aligner import MismatchAligner
from .seed_scanner import SeedScanner
from .result_store import Hit, ResultStore

# Set up module logger
logger = logging.getLogger(__name__)


class OffTargetSearch:
    """
    Searches sequences for off-target sites of one guide.

    The guide is split into a remainder (5' part) and a seed (3' part of
    ``seed_length`` nucleotides). Sites must contain the exact seed,
    followed immediately by a valid PAM, and a remainder with at most
    ``budget`` mismatches.

    Attributes:
        query: Guide sequence in DNA form (upper case)
        budget: Maximum number of mismatches allowed
        seed: 3' seed of the guide
        remainder: Guide without the seed

    Example:
        >>> search = OffTargetSearch("ATGCATGCATGCATGCATGC", "NGG", 1)
        >>> store = search.search(genome_text, label="1")
        >>> for count, hits in store.groups():
        ...     print(count, len(hits))
    """

    def __init__(self, query: str, motif_pattern: str, budget: int, seed_length: Optional[int] = None):
        """
        Initialize the search for one guide, PAM and mismatch budget.

        Args:
            query: Validated guide sequence (A/T/G/C, upper case)
            motif_pattern: PAM pattern such as "NGG"
            budget: Maximum number of mismatches allowed
            seed_length: Seed length, defaults to Config.SEED_LENGTH

        Raises:
            ConfigError: If the guide is not longer than the seed or the budget is invalid
            MotifPatternError: If the PAM pattern is invalid
        """
        if seed_length is None:
            seed_length = Config.SEED_LENGTH

        if not isinstance(query, str) or len(query) <= seed_length:
            error_msg = f"Guide must be longer than the seed length {seed_length}, got {query!r}"
            logger.error(error_msg)
            raise ConfigError(error_msg)

        self.query = query
        self.budget = budget
        self.seed_length = seed_length
        self.seed = query[-seed_length:]
        self.remainder = query[:-seed_length]

        self.motif_matcher = MotifMatcher(motif_pattern)
        self.aligner = MismatchAligner(budget)
        self.scanner = SeedScanner(self.seed, self.motif_matcher)

        logger.debug(f"OffTargetSearch: seed={self.seed}, remainder={self.remainder}, "
                     f"PAM={self.motif_matcher.pattern}, budget={budget}")

    @property
    def motif_pattern(self) -> str:
        return self.motif_matcher.pattern

    def search(self, text: str, label: str, store: Optional[ResultStore] = None) -> ResultStore:
        """
        Search one sequence and add its hits to a result store.

        Args:
            text: Nucleotide sequence; lower-case (soft-masked) bases are
                searched as upper case
            label: Chromosome or sequence name attached to every hit
            store: Store to append to; a new one is created if omitted

        Returns:
            The store holding this sequence's hits
        """
        if store is None:
            store = ResultStore(self.budget)
        if not text.isupper():
            text = text.upper()

        remainder = self.remainder
        remainder_length = len(remainder)
        candidates = 0
        found = 0

        for seed_position, concrete_pam in self.scanner.scan(text):
            candidates += 1
            window_start = seed_position - remainder_length
            if window_start < 0:
                continue

            alignment = self.aligner.align(remainder, text[window_start:seed_position])
            if alignment is None:
                continue

            mismatches, annotated = alignment
            hit = Hit(
                position=window_start + 1,
                label=label,
                sequence=annotated + self.seed + concrete_pam,
                mismatches=mismatches,
            )
            store.insert(mismatches, hit)
            found += 1

        logger.debug(f"Sequence {label}: {candidates} seed/PAM candidates, {found} hits")
        return store

    def search_buffers(self, buffers: Mapping[str, str], max_workers: Optional[int] = None,
                       cancel_event: Optional[threading.Event] = None) -> ResultStore:
        """
        Search several labelled sequences into one result store.

        Results are merged in the iteration order of ``buffers``, so the
        parallel and sequential paths produce identical stores.

        Args:
            buffers: Ordered mapping of label to sequence
            max_workers: Number of worker processes, defaults to Config.NUM_PROCESSES
            cancel_event: Checked between sequences; once set, no further
                sequences are started and results not yet collected are dropped

        Returns:
            ResultStore with hits from every searched sequence

        Raises:
            SearchError: If searching any sequence fails
        """
        if max_workers is None:
            max_workers = Config.NUM_PROCESSES
        max_workers = max(1, min(max_workers, len(buffers)))

        logger.debug(f"Searching {len(buffers)} sequences with {max_workers} worker(s)")

        if max_workers == 1:
            return self._search_sequential(buffers, cancel_event)
        return self._search_parallel(buffers, max_workers, cancel_event)

    def _search_sequential(self, buffers, cancel_event):
        store = ResultStore(self.budget)
        items = buffers.items()
        if Config.SHOW_PROGRESS and len(buffers) > 1:
            items = tqdm(items, total=len(buffers), desc="Searching sequences")

        for label, text in items:
            if _is_cancelled(cancel_event):
                logger.warning(f"Search cancelled before sequence {label}")
                break
            try:
                self.search(text, label, store)
            except Exception as e:
                error_msg = "Off-target search failed"
                logger.error(f"{error_msg} for sequence {label}")
                logger.debug(f"Error details: {str(e)}", exc_info=True)
                raise SearchError(error_msg, label=label) from e
            logger.debug(f"Sequence {label} searched")

        return store

    def _search_parallel(self, buffers, max_workers, cancel_event):
        labels = list(buffers)
        partials = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            future_to_label = {}
            for label in labels:
                if _is_cancelled(cancel_event):
                    logger.warning(f"Search cancelled before sequence {label}")
                    break
                future = executor.submit(_search_buffer, self.query, self.motif_pattern, self.budget,
                                         self.seed_length, buffers[label], label)
                future_to_label[future] = label

            completed = as_completed(future_to_label)
            if Config.SHOW_PROGRESS:
                completed = tqdm(completed, total=len(future_to_label), desc="Searching sequences")

            for future in completed:
                if _is_cancelled(cancel_event):
                    cancelled = sum(1 for pending in future_to_label if pending.cancel())
                    logger.warning(f"Search cancelled, {cancelled} sequence(s) not started")
                    break
                label = future_to_label[future]
                if future.cancelled():
                    continue
                try:
                    partials[label] = future.result()
                except Exception as e:
                    error_msg = "Off-target search failed"
                    logger.error(f"{error_msg} for sequence {label}")
                    logger.debug(f"Error details: {str(e)}", exc_info=True)
                    for pending in future_to_label:
                        pending.cancel()
                    raise SearchError(error_msg, label=label) from e
                logger.debug(f"Sequence {label} searched")

        store = ResultStore(self.budget)
        for label in labels:
            if label in partials:
                store.merge(partials[label])
        return store


def _is_cancelled(cancel_event):
    return cancel_event is not None and cancel_event.is_set()


def _search_buffer(query, motif_pattern, budget, seed_length, text, label):
    """Worker entry point: search one sequence in a child process."""
    return OffTargetSearch(query, motif_pattern, budget, seed_length).search(text, label)


def find_off_targets(query: str, motif_pattern: str, budget: int, buffers: Mapping[str, str],
                     max_workers: Optional[int] = None) -> ResultStore:
    """
    Convenience wrapper: search ``buffers`` for off-targets of ``query``.

    Example:
        >>> store = find_off_targets("ATGCATGCATGCATGCATGC", "NGG", 2, {"1": chrom1})
    """
    return OffTargetSearch(query, motif_pattern, budget).search_buffers(buffers, max_workers=max_workers)
