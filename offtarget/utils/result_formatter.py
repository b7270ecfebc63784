#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Presentation of off-target search results.

Text output groups hits by mismatch count in ascending order:

    1 mismatches (2)
    --------------------------------------------------------
    Chromosome 1 Position 1043: ATGCATGCATgCATGCATGCAGG
    Chromosome X Position 88: ...
"""

import logging

import pandas as pd

# Set up module logger
logger = logging.getLogger(__name__)


class ResultFormatter:
    """Formats a ResultStore as text or as a pandas DataFrame."""

    SEPARATOR = "-" * 56
    COLUMNS = ["Mismatches", "Chromosome", "Position", "Sequence"]

    @staticmethod
    def format_hit(hit) -> str:
        return f"Chromosome {hit.label} Position {hit.position}: {hit.sequence}"

    @classmethod
    def format_results(cls, store) -> str:
        """
        Render all non-empty mismatch groups as text.

        Args:
            store: ResultStore to render

        Returns:
            Multi-line report, empty string if there are no hits
        """
        lines = []
        for count, hits in store.for_each_group_ascending():
            lines.append(f"{count} mismatches ({len(hits)})")
            lines.append(cls.SEPARATOR)
            lines.extend(cls.format_hit(hit) for hit in hits)
            lines.append("")
        return "\n".join(lines)

    @classmethod
    def print_results(cls, store) -> None:
        if len(store) == 0:
            print("No off-target sites found.")
            return
        print(cls.format_results(store))

    @classmethod
    def to_dataframe(cls, store) -> pd.DataFrame:
        """One row per hit, in the same order as the text report."""
        return pd.DataFrame(store.to_records(), columns=cls.COLUMNS)

    @classmethod
    def summarize(cls, store) -> str:
        """Single-line count of hits per mismatch group."""
        if len(store) == 0:
            return "No off-target sites found"
        parts = [f"{count} mismatches: {len(hits)}" for count, hits in store.groups()]
        return f"Found {len(store)} off-target sites ({', '.join(parts)})"
