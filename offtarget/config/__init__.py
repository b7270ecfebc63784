#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Configuration package for the offtarget pipeline.
"""

from .config import Config
from .logging_config import setup_logging, LoggingConfigError
from .exceptions import (
    OffTargetError,
    FileError,
    FileFormatError,
    ConfigError,
    MotifPatternError,
    GuideValidationError,
    SearchError,
)
from .config_display import display_config

__all__ = [
    'Config',
    'setup_logging',
    'LoggingConfigError',
    'OffTargetError',
    'FileError',
    'FileFormatError',
    'ConfigError',
    'MotifPatternError',
    'GuideValidationError',
    'SearchError',
    'display_config',
]
