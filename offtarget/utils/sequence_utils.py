#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Sequence utility functions for the offtarget pipeline.

Contains functionality for:
1. Guide RNA validation and conversion to DNA
2. Mismatch budget validation
3. Random DNA sequence generation

This module prepares user input for the search core, which assumes
already-validated values.
"""

import logging
from typing import Optional

import numpy as np

# Import package modules
from ..config import Config, ConfigError, GuideValidationError

# Set up module logger
logger = logging.getLogger(__name__)


class SequenceUtils:
    """
    Sequence-specific utility functions for guide and genome input.

    Example:
        >>> SequenceUtils.normalize_guide("augcaugcaugcaugcaugc")
        'ATGCATGCATGCATGCATGC'
        >>> len(SequenceUtils.generate_random_sequence(100, seed=1))
        100
    """

    GUIDE_ALPHABET = frozenset("ATUGC")
    NUCLEOTIDES = np.frombuffer(b"ATGC", dtype=np.uint8)

    @staticmethod
    def normalize_guide(seq):
        """
        Convert a guide RNA (or DNA) sequence to upper-case DNA.

        Strips surrounding whitespace, upper-cases and replaces U with T.

        Args:
            seq: Guide sequence as entered by the user

        Returns:
            Normalized DNA sequence

        Example:
            >>> SequenceUtils.normalize_guide(" acgu ")
            'ACGT'
        """
        if not isinstance(seq, str):
            logger.debug("Invalid sequence type provided to normalize_guide")
            return ""
        return seq.strip().upper().replace('U', 'T')

    @classmethod
    def validate_guide(cls, seq, expected_length: Optional[int] = None) -> str:
        """
        Validate a guide sequence and return it in normalized DNA form.

        The guide must consist of A, U, T, G or C (any case) and have a
        length within Config.MIN_GUIDE_LENGTH..Config.MAX_GUIDE_LENGTH, or
        exactly ``expected_length`` when given.

        Args:
            seq: Guide sequence as entered by the user
            expected_length: Length the user declared for the guide

        Returns:
            Normalized DNA guide

        Raises:
            GuideValidationError: If the guide has an invalid length or alphabet

        Example:
            >>> SequenceUtils.validate_guide("AUGCAUGCAUGCAUGCAUGC")
            'ATGCATGCATGCATGCATGC'
        """
        if not isinstance(seq, str):
            raise GuideValidationError(f"Guide must be a string, got {type(seq).__name__}", guide=seq)

        stripped = seq.strip()

        if expected_length is not None:
            if len(stripped) != expected_length:
                error_msg = f"Sequence entered is not {expected_length} nucleotides long"
                logger.debug(f"{error_msg}: {stripped}")
                raise GuideValidationError(error_msg, guide=seq, expected_length=expected_length)
        elif not Config.MIN_GUIDE_LENGTH <= len(stripped) <= Config.MAX_GUIDE_LENGTH:
            error_msg = (f"Guide length {len(stripped)} not in the range "
                         f"{Config.MIN_GUIDE_LENGTH} - {Config.MAX_GUIDE_LENGTH}")
            logger.debug(error_msg)
            raise GuideValidationError(error_msg, guide=seq)

        invalid_chars = set(stripped.upper()) - cls.GUIDE_ALPHABET
        if invalid_chars:
            error_msg = f"Invalid characters in guide sequence: {', '.join(sorted(invalid_chars))}"
            logger.debug(error_msg)
            raise GuideValidationError(error_msg, guide=seq, expected_length=expected_length)

        return cls.normalize_guide(stripped)

    @staticmethod
    def validate_guide_length(length) -> int:
        """
        Validate a declared guide length.

        Raises:
            GuideValidationError: If the length is outside the allowed range
        """
        if isinstance(length, bool) or not isinstance(length, int):
            raise GuideValidationError(f"Guide length must be an integer, got {length!r}")
        if not Config.MIN_GUIDE_LENGTH <= length <= Config.MAX_GUIDE_LENGTH:
            raise GuideValidationError(
                f"Not in the correct range of {Config.MIN_GUIDE_LENGTH} - {Config.MAX_GUIDE_LENGTH}"
            )
        return length

    @staticmethod
    def validate_mismatches(value) -> int:
        """
        Validate a mismatch budget.

        Args:
            value: Number of mismatches allowed

        Returns:
            The budget as an int

        Raises:
            ConfigError: If the value is not an integer in the allowed range
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"Number of mismatches must be an integer, got {value!r}")
        if not Config.MIN_MISMATCHES <= value <= Config.MAX_MISMATCHES:
            raise ConfigError(
                f"Not in the correct range of {Config.MIN_MISMATCHES} - {Config.MAX_MISMATCHES}"
            )
        return value

    @classmethod
    def generate_random_sequence(cls, length, seed=None) -> str:
        """
        Generate a random DNA sequence with uniform nucleotide frequencies.

        Args:
            length: Number of nucleotides
            seed: Optional seed for reproducible output

        Returns:
            Random sequence over A, T, G, C

        Raises:
            ValueError: If length is negative or not an integer

        Example:
            >>> SequenceUtils.generate_random_sequence(8, seed=42) == SequenceUtils.generate_random_sequence(8, seed=42)
            True
        """
        if isinstance(length, bool) or not isinstance(length, int) or length < 0:
            error_msg = f"Sequence length must be a non-negative integer, got {length!r}"
            logger.error(error_msg)
            raise ValueError(error_msg)

        rng = np.random.default_rng(seed)
        sequence = cls.NUCLEOTIDES[rng.integers(0, 4, size=length)].tobytes().decode("ascii")

        logger.debug(f"Generated random sequence of length {length}")
        return sequence
