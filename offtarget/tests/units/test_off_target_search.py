#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Unit tests for OffTargetSearch.

Beyond the concrete scenarios, the search is checked against a brute-force
scan of every window on random sequences with planted sites.
"""

import threading

import pytest

# Import package modules
from ...config import ConfigError, MotifPatternError, SearchError
from ...core import MotifMatcher, OffTargetSearch, ResultStore, find_off_targets
from ...utils import SequenceUtils
from ..test_helpers import reference_search, hits_as_tuples, plant


SHORT_GUIDE = "GATCCATGAC"


@pytest.fixture
def random_text():
    """Random background with near-copies of SHORT_GUIDE planted next to PAMs."""
    text = SequenceUtils.generate_random_sequence(20000, seed=7)
    sites = [
        (500, "GATCCATGAC" + "TGG"),   # exact
        (1500, "GTTCCATGAC" + "AGG"),  # 1 mismatch
        (2500, "GTTCGATGAC" + "CAG"),  # 2 mismatches, NRG only
        (3500, "CTTCGTTGAC" + "GGG"),  # 4 mismatches
        (4500, "GATCCATGAC" + "TCC"),  # exact but no PAM
    ]
    for offset, site in sites:
        text = plant(text, site, offset)
    return text


class TestOffTargetSearch:
    """Tests for OffTargetSearch class."""

    def test_concrete_site(self, guide, site_with_one_mismatch):
        """One-mismatch site at offset 10 is reported at position 11."""
        store = OffTargetSearch(guide, "NGG", 1).search(site_with_one_mismatch, "1")

        assert len(store) == 1
        assert store.get(0) == ()
        (hit,) = store.get(1)
        assert hit.position == 11
        assert hit.label == "1"
        assert hit.mismatches == 1
        assert hit.sequence == "ATGCAaGCATGCATGCATGCAGG"
        assert hit.verbatim_sequence == site_with_one_mismatch[10:33]

    def test_concrete_site_zero_budget(self, guide, site_with_one_mismatch):
        store = OffTargetSearch(guide, "NGG", 0).search(site_with_one_mismatch, "1")
        assert len(store) == 0

    def test_split_into_seed_and_remainder(self, guide):
        search = OffTargetSearch(guide, "ngg", 2)
        assert search.seed == "TGC"
        assert search.remainder == "ATGCATGCATGCATGCA"
        assert search.motif_pattern == "NGG"

    def test_custom_seed_length(self, guide, site_with_one_mismatch):
        search = OffTargetSearch(guide, "NGG", 1, seed_length=5)
        assert search.seed == "CATGC"
        store = search.search(site_with_one_mismatch, "1")
        assert [hit.position for hit in store] == [11]

    def test_window_before_sequence_start_skipped(self, guide):
        """A seed + PAM too close to the start leaves no room for the window."""
        store = OffTargetSearch(guide, "NGG", 9).search("GCATGCAGGTTTT", "1")
        assert len(store) == 0

    def test_site_at_sequence_start(self, guide):
        text = guide + "TGG" + "TTTT"
        store = OffTargetSearch(guide, "NGG", 0).search(text, "1")
        assert [hit.position for hit in store] == [1]

    def test_site_at_sequence_end(self, guide):
        text = "TTTT" + guide + "CGG"
        store = OffTargetSearch(guide, "NGG", 0).search(text, "1")
        assert [hit.position for hit in store] == [5]

    def test_out_of_alphabet_window_base(self, guide):
        """Unknown bases in the window are counted as mismatches."""
        text = "TTTT" + "ATGCANGCATGCATGCATGC" + "TGG"
        (hit,) = OffTargetSearch(guide, "NGG", 1).search(text, "1")
        assert hit.sequence == "ATGCAnGCATGCATGCATGCTGG"

    def test_appends_to_existing_store(self, guide, site_with_one_mismatch):
        search = OffTargetSearch(guide, "NGG", 1)
        store = ResultStore(1)
        returned = search.search(site_with_one_mismatch, "A", store)
        search.search(site_with_one_mismatch, "B", store)
        assert returned is store
        assert [hit.label for hit in store.get(1)] == ["A", "B"]

    def test_matches_brute_force(self, random_text):
        """Every hit is real and every real site is found, for several budgets and PAMs."""
        for pattern in ("NGG", "NRG", "NNGRRT"):
            matcher = MotifMatcher(pattern)
            for budget in range(0, 5):
                store = OffTargetSearch(SHORT_GUIDE, pattern, budget).search(random_text, "r")
                expected = reference_search(SHORT_GUIDE, random_text, matcher, budget)
                assert hits_as_tuples(store) == expected, f"{pattern} with budget {budget}"

    def test_planted_sites_found(self, random_text):
        store = OffTargetSearch(SHORT_GUIDE, "NRG", 2).search(random_text, "r")
        found = {(hit.position, hit.mismatches) for hit in store}
        assert {(501, 0), (1501, 1), (2501, 2)} <= found
        assert 4501 not in {hit.position for hit in store}

        store = OffTargetSearch(SHORT_GUIDE, "NGG", 2).search(random_text, "r")
        assert 2501 not in {hit.position for hit in store}

    def test_hit_invariants(self, random_text):
        """Reported mismatch counts, seeds and PAMs agree with the text."""
        matcher = MotifMatcher("NGG")
        store = OffTargetSearch(SHORT_GUIDE, "NGG", 4).search(random_text, "r")
        assert len(store) > 0
        for count, hits in store.groups():
            for hit in hits:
                start = hit.position - 1
                window = random_text[start:start + len(SHORT_GUIDE)]
                pam = random_text[start + len(SHORT_GUIDE):start + len(SHORT_GUIDE) + 3]
                assert hit.mismatches == count <= 4
                assert sum(a != b for a, b in zip(window, SHORT_GUIDE)) == count
                assert window[-3:] == SHORT_GUIDE[-3:]
                assert matcher.match(pam) == pam
                assert hit.verbatim_sequence == window + pam
                assert sum(c.islower() for c in hit.sequence) == count

    def test_zero_budget_equals_exact_search(self, random_text):
        matcher = MotifMatcher("NGG")
        expected = []
        position = random_text.find(SHORT_GUIDE)
        while position != -1:
            pam_start = position + len(SHORT_GUIDE)
            if matcher.match(random_text[pam_start:pam_start + 3]):
                expected.append(position + 1)
            position = random_text.find(SHORT_GUIDE, position + 1)

        store = OffTargetSearch(SHORT_GUIDE, "NGG", 0).search(random_text, "r")
        assert sorted(hit.position for hit in store) == expected
        assert 501 in expected

    def test_budget_monotonicity(self, random_text):
        previous = set()
        for budget in range(0, 6):
            store = OffTargetSearch(SHORT_GUIDE, "NGG", budget).search(random_text, "r")
            current = set(hits_as_tuples(store))
            assert previous <= current
            previous = current

    def test_idempotent(self, random_text):
        search = OffTargetSearch(SHORT_GUIDE, "NGG", 3)
        assert search.search(random_text, "r") == search.search(random_text, "r")

    def test_lowercase_text(self, guide):
        """Soft-masked (lower-case) sequence is searched as upper case."""
        text = ("TTTT" + guide + "AGG").lower()
        (hit,) = OffTargetSearch(guide, "NGG", 0).search(text, "1")
        assert hit.position == 5
        assert hit.sequence == guide + "AGG"

        store = find_off_targets(guide, "NGG", 0, {"1": text})
        assert [hit.position for hit in store] == [5]

    def test_invalid_construction(self, guide):
        with pytest.raises(ConfigError):
            OffTargetSearch("TGC", "NGG", 1)
        with pytest.raises(ConfigError):
            OffTargetSearch(guide, "NGG", 10)
        with pytest.raises(MotifPatternError):
            OffTargetSearch(guide, "NGZ", 1)


class TestSearchBuffers:
    """Tests for multi-sequence search."""

    def test_hits_carry_their_label(self, guide, site_with_one_mismatch):
        buffers = {"chrA": site_with_one_mismatch, "chrB": "T" * 200}
        store = OffTargetSearch(guide, "NGG", 1).search_buffers(buffers)
        assert [(hit.label, hit.position) for hit in store] == [("chrA", 11)]

    def test_merge_follows_buffer_order(self, guide, site_with_one_mismatch):
        search = OffTargetSearch(guide, "NGG", 1)
        forward = search.search_buffers({"A": site_with_one_mismatch, "B": site_with_one_mismatch})
        backward = search.search_buffers({"B": site_with_one_mismatch, "A": site_with_one_mismatch})
        assert [hit.label for hit in forward] == ["A", "B"]
        assert [hit.label for hit in backward] == ["B", "A"]

    def test_empty_buffers(self, guide):
        store = OffTargetSearch(guide, "NGG", 2).search_buffers({})
        assert len(store) == 0
        assert store.budget == 2

    def test_parallel_equals_sequential(self, random_text):
        buffers = {
            "1": random_text[:10000],
            "2": random_text[10000:],
            "3": random_text[:7000],
        }
        search = OffTargetSearch(SHORT_GUIDE, "NGG", 3)
        sequential = search.search_buffers(buffers, max_workers=1)
        parallel = search.search_buffers(buffers, max_workers=2)
        assert len(sequential) > 0
        assert parallel == sequential

    def test_cancel_before_start(self, guide, site_with_one_mismatch):
        cancel_event = threading.Event()
        cancel_event.set()
        store = OffTargetSearch(guide, "NGG", 1).search_buffers(
            {"A": site_with_one_mismatch}, cancel_event=cancel_event
        )
        assert len(store) == 0

    def test_cancel_before_start_parallel(self, guide, site_with_one_mismatch):
        cancel_event = threading.Event()
        cancel_event.set()
        store = OffTargetSearch(guide, "NGG", 1).search_buffers(
            {"A": site_with_one_mismatch, "B": site_with_one_mismatch},
            max_workers=2, cancel_event=cancel_event,
        )
        assert len(store) == 0

    def test_failure_reports_label(self, guide, site_with_one_mismatch):
        buffers = {"good": site_with_one_mismatch, "bad": None}
        with pytest.raises(SearchError) as excinfo:
            OffTargetSearch(guide, "NGG", 1).search_buffers(buffers, max_workers=1)
        assert excinfo.value.label == "bad"
        assert "bad" in str(excinfo.value)

    def test_failure_reports_label_parallel(self, guide, site_with_one_mismatch):
        """A sequence that fails inside a worker process is named in the SearchError."""
        buffers = {"good": site_with_one_mismatch, "bad": None}
        with pytest.raises(SearchError) as excinfo:
            OffTargetSearch(guide, "NGG", 1).search_buffers(buffers, max_workers=2)
        assert excinfo.value.label == "bad"
        assert "bad" in str(excinfo.value)

    def test_find_off_targets(self, guide, site_with_one_mismatch):
        store = find_off_targets(guide, "NGG", 1, {"1": site_with_one_mismatch})
        assert [hit.position for hit in store.get(1)] == [11]
