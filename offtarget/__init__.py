"""
offtarget: CRISPR off-target site prediction.

This package searches genomic sequences for sites that match a guide
sequence with a bounded number of mismatches and are followed by a valid
PAM (Protospacer Adjacent Motif).
"""

__version__ = "1.0.0"
