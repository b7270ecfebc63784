#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Catalog of common PAM (Protospacer Adjacent Motif) templates.

Entries are numbered from 1 in the order they are offered to the user.
Patterns use IUPAC codes: N = any, R = A/G, W = A/T, M = A/C,
V = G/C/A, Y = C/T.
"""

import logging
from typing import NamedTuple, Tuple

# Import package modules
from ..config import MotifPatternError
from ..core import MotifMatcher

# Set up module logger
logger = logging.getLogger(__name__)


class PAMTemplate(NamedTuple):
    enzyme: str
    organism: str
    pattern: str


class PAMCatalog:
    """
    Named PAM templates for common Cas nucleases.

    Example:
        >>> PAMCatalog.get(1).pattern
        'NGG'
        >>> PAMCatalog.resolve("5")
        'NNGRRT'
        >>> PAMCatalog.resolve("nrg")
        'NRG'
    """

    TEMPLATES: Tuple[PAMTemplate, ...] = (
        PAMTemplate("SpCas9", "Streptococcus pyogenes", "NGG"),
        PAMTemplate("SpCas9", "Streptococcus pyogenes", "NRG"),
        PAMTemplate("StCas9", "Streptococcus thermophilus", "NNAGAAW"),
        PAMTemplate("NmCas9", "Neisseria meningitidis", "NNNNGMTT"),
        PAMTemplate("SaCas9", "Staphylococcus aureus", "NNGRRT"),
        PAMTemplate("CjCas9", "Campylobacter jejuni", "NNNVRYAC"),
        PAMTemplate("CjCas9", "Campylobacter jejuni", "NNNNRYAC"),
        PAMTemplate("AsCpf1/LbCpf1", "Acidaminococcus / Lachnospiraceae", "TTTN"),
        PAMTemplate("AsCpf1/LbCpf1", "Acidaminococcus / Lachnospiraceae", "TTTV"),
        PAMTemplate("SpCas9", "Streptococcus pasteurianus", "NNGTGA"),
        PAMTemplate("FnCpf1", "Francisella", "TTN"),
        PAMTemplate("SaCas9", "Staphylococcus aureus", "NNNRRT"),
    )

    @classmethod
    def get(cls, index: int) -> PAMTemplate:
        """
        Return the template with the given 1-based catalog number.

        Raises:
            MotifPatternError: If the index is outside the catalog
        """
        if isinstance(index, bool) or not isinstance(index, int) or not 1 <= index <= len(cls.TEMPLATES):
            raise MotifPatternError(
                f"PAM catalog number must be between 1 and {len(cls.TEMPLATES)}, got {index!r}"
            )
        return cls.TEMPLATES[index - 1]

    @classmethod
    def resolve(cls, value) -> str:
        """
        Resolve a catalog number or a verbatim pattern to a validated PAM pattern.

        Args:
            value: Catalog number (int or digit string) or an IUPAC pattern

        Returns:
            Upper-case PAM pattern

        Raises:
            MotifPatternError: If the number is unknown or the pattern is invalid
        """
        if isinstance(value, int) and not isinstance(value, bool):
            return cls.get(value).pattern

        if not isinstance(value, str) or not value.strip():
            raise MotifPatternError(f"PAM must be a catalog number or a pattern, got {value!r}")

        value = value.strip()
        if value.isdigit():
            return cls.get(int(value)).pattern

        # Validates the symbols
        pattern = MotifMatcher(value).pattern
        logger.debug(f"Using verbatim PAM pattern {pattern}")
        return pattern

    @classmethod
    def describe(cls) -> str:
        """Numbered, human-readable listing of the catalog."""
        lines = []
        for number, template in enumerate(cls.TEMPLATES, 1):
            lines.append(f"{number}. {template.enzyme} from {template.organism}: 5'-{template.pattern}-3'")
        return "\n".join(lines)
