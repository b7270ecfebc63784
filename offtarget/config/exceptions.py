#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Custom exceptions for the offtarget package.

This module defines exception classes used throughout the off-target
search pipeline to provide more specific error information and improve
error handling.
"""


class OffTargetError(Exception):
    """Base exception class for all offtarget-specific errors."""
    pass


class FileError(OffTargetError):
    """Base class for file-related errors."""
    pass


class FileFormatError(FileError):
    """Error with file formatting or parsing."""
    pass


class ConfigError(OffTargetError):
    """Error with configuration parameters."""
    pass


class MotifPatternError(ConfigError):
    """PAM pattern contains an unknown symbol or cannot be resolved."""
    pass


class GuideValidationError(ConfigError):
    """Guide sequence has the wrong length or contains invalid characters."""

    def __init__(self, message, guide=None, expected_length=None):
        """
        Initialize with the rejected guide for error reporting.

        Args:
            message (str): Error message
            guide (str, optional): The guide sequence that failed validation
            expected_length (int, optional): Length the guide was expected to have
        """
        self.guide = guide
        self.expected_length = expected_length
        super().__init__(message)


class SearchError(OffTargetError):
    """Error during off-target search orchestration."""

    def __init__(self, message, label=None):
        """
        Initialize with the label of the buffer that failed.

        Args:
            message (str): Error message
            label (str, optional): Label of the sequence being searched
        """
        self.label = label

        detailed_message = message
        if label is not None:
            detailed_message = f"{message} (sequence: {label})"

        super().__init__(detailed_message)
