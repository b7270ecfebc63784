"""
Utility modules for the offtarget pipeline.

This subpackage contains utility functions:
- sequence_utils: Guide validation and random sequence generation
- pam_catalog: Named PAM templates
- file_io: Sequence loading and result export
- result_formatter: Text and tabular result presentation
"""

from .sequence_utils import SequenceUtils
from .pam_catalog import PAMCatalog, PAMTemplate
from .result_formatter import ResultFormatter
from .file_io import FileIO

__all__ = [
    'SequenceUtils',
    'PAMCatalog',
    'PAMTemplate',
    'ResultFormatter',
    'FileIO',
]
