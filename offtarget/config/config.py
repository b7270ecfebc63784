#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Configuration module for the offtarget pipeline.

Contains functionality for:
1. Search defaults and accepted input ranges as class attributes
2. JSON overrides loaded from a user file, with validation
3. Export of the current settings for display or saving

Settings are read directly from the class (``Config.SEED_LENGTH``) by every
module; ``get_instance`` exists for callers that prefer an object.
"""

import os
import json
import logging
from multiprocessing import cpu_count
from typing import Dict, Any

from .exceptions import ConfigError, FileFormatError

logger = logging.getLogger(__name__)

JSON_TYPES = (str, int, float, bool, list, dict)

# Upper bound for MAX_MISMATCHES, whatever a configuration file says
MISMATCH_LIMIT = 9


class Config:
    """
    Pipeline-wide settings for the off-target search.

    Attributes:
        DEBUG_MODE: Set by setup_logging when --debug is given
        NUM_PROCESSES: Worker processes used when searching several sequences
        SEED_LENGTH: Exact-match seed length at the 3' end of the guide
        MAX_MISMATCHES: Largest mismatch budget accepted

    Example:
        >>> Config.load_from_file("my_config.json")
        >>> Config.DEFAULT_MISMATCHES
        2
    """

    _instance = None

    #############################################################################
    #                           Pipeline Mode Options
    #############################################################################
    DEBUG_MODE = False

    #############################################################################
    #                           Performance Settings
    #############################################################################
    NUM_PROCESSES = max(1, int(cpu_count() * 0.75))
    SHOW_PROGRESS = True

    #############################################################################
    #                           Search Parameters
    #############################################################################
    SEED_LENGTH = 3                      # Exact-match seed at the 3' end of the guide
    DEFAULT_PAM = "NGG"
    DEFAULT_MISMATCHES = 3

    # Valid input ranges
    MIN_GUIDE_LENGTH = 15
    MAX_GUIDE_LENGTH = 25
    MIN_MISMATCHES = 0
    MAX_MISMATCHES = 9

    #############################################################################
    #                           Genome Input Options
    #############################################################################
    HUMAN_CHROMOSOMES = [str(i) for i in range(1, 23)] + ["X", "Y"]
    HUMAN_CHROMOSOME_FILE_TEMPLATE = "human_chromosome_{}.txt"
    RANDOM_SEQUENCE_LABEL = "random"

    @classmethod
    def get_instance(cls) -> 'Config':
        """Return the shared Config object, creating it on first use."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def get_user_config_dir(cls) -> str:
        """
        Return ``~/.offtarget``, creating it if needed.

        Raises:
            ConfigError: If the directory cannot be created
        """
        config_dir = os.path.join(os.path.expanduser("~"), ".offtarget")
        try:
            os.makedirs(config_dir, exist_ok=True)
        except OSError as e:
            error_msg = f"Cannot create configuration directory {config_dir}"
            logger.error(error_msg)
            logger.debug(f"Error details: {str(e)}", exc_info=True)
            raise ConfigError(error_msg) from e
        return config_dir

    @classmethod
    def validate(cls) -> None:
        """
        Check that the current settings form a usable search configuration.

        Raises:
            ConfigError: If any search parameter is out of range
        """
        if not isinstance(cls.SEED_LENGTH, int) or cls.SEED_LENGTH < 1:
            raise ConfigError(f"SEED_LENGTH must be a positive integer, got {cls.SEED_LENGTH}")
        if cls.SEED_LENGTH >= cls.MIN_GUIDE_LENGTH:
            raise ConfigError(
                f"SEED_LENGTH ({cls.SEED_LENGTH}) must be shorter than MIN_GUIDE_LENGTH ({cls.MIN_GUIDE_LENGTH})"
            )
        if not all(isinstance(value, int) for value in (cls.MIN_MISMATCHES, cls.MAX_MISMATCHES)) \
                or not 0 <= cls.MIN_MISMATCHES <= cls.MAX_MISMATCHES <= MISMATCH_LIMIT:
            raise ConfigError(
                f"Mismatch range must satisfy 0 <= MIN_MISMATCHES <= MAX_MISMATCHES <= {MISMATCH_LIMIT}, "
                f"got {cls.MIN_MISMATCHES}-{cls.MAX_MISMATCHES}"
            )
        if not cls.MIN_MISMATCHES <= cls.DEFAULT_MISMATCHES <= cls.MAX_MISMATCHES:
            raise ConfigError(
                f"DEFAULT_MISMATCHES must be between {cls.MIN_MISMATCHES} and {cls.MAX_MISMATCHES}, "
                f"got {cls.DEFAULT_MISMATCHES}"
            )
        if not isinstance(cls.NUM_PROCESSES, int) or cls.NUM_PROCESSES < 1:
            raise ConfigError(f"NUM_PROCESSES must be a positive integer, got {cls.NUM_PROCESSES}")

    @classmethod
    def load_from_file(cls, filepath: str) -> bool:
        """
        Override settings from a JSON object file.

        Keys that name an existing setting are applied; anything else is
        reported and skipped. The result is validated before returning.

        Args:
            filepath: Path to the JSON file

        Returns:
            bool: True once the settings are applied

        Raises:
            FileFormatError: If the file does not exist
            ConfigError: If the file is not a JSON object or the settings are invalid
        """
        if not os.path.exists(filepath):
            error_msg = f"Configuration file not found: {filepath}"
            logger.error(error_msg)
            raise FileFormatError(error_msg)

        try:
            with open(filepath) as f:
                overrides = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            error_msg = f"Cannot read configuration file {filepath}"
            logger.error(error_msg)
            logger.debug(f"Error details: {str(e)}", exc_info=True)
            raise ConfigError(error_msg) from e

        if not isinstance(overrides, dict):
            raise ConfigError(f"Configuration file {filepath} must contain a JSON object")

        known = cls.get_all_settings()
        for key, value in overrides.items():
            if key in known:
                setattr(cls, key, value)
                logger.debug(f"{key} = {value!r}")
            else:
                logger.warning(f"Ignoring unknown configuration key: {key}")

        cls.validate()
        logger.debug(f"Applied settings from {filepath}")
        return True

    @classmethod
    def save_to_file(cls, filepath: str) -> bool:
        """
        Write the JSON-serializable settings to ``filepath``.

        Raises:
            ConfigError: If the file cannot be written
        """
        settings = {key: value for key, value in cls.get_all_settings().items()
                    if value is None or isinstance(value, JSON_TYPES)}
        try:
            with open(filepath, 'w') as f:
                json.dump(settings, f, indent=4)
        except (OSError, TypeError) as e:
            error_msg = f"Cannot write configuration file {filepath}"
            logger.error(error_msg)
            logger.debug(f"Error details: {str(e)}", exc_info=True)
            raise ConfigError(error_msg) from e

        logger.debug(f"Saved {len(settings)} settings to {filepath}")
        return True

    @classmethod
    def get_all_settings(cls) -> Dict[str, Any]:
        """Public settings (upper-case class attributes) by name."""
        return {key: getattr(cls, key) for key in dir(cls) if key.isupper() and not key.startswith('_')}
