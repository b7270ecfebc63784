#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Logging configuration module for the offtarget pipeline.

Contains functionality for:
1. Per-module debug levels, selected by short module name
2. Colored console output in debug mode
3. A timestamped log file per run

``--debug`` with no arguments turns on debug output everywhere;
``--debug seed_scanner file_io`` limits it to those modules while the rest
of the package stays at INFO.
"""

import os
import logging
from datetime import datetime
from typing import Dict, List, Optional, Tuple, Union

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

PACKAGE = "offtarget"

# Every module that can be selected with --debug
PACKAGE_MODULES = (
    "offtarget.pipeline",
    "offtarget.core.motif_matcher",
    "offtarget.core.mismatch_aligner",
    "offtarget.core.seed_scanner",
    "offtarget.core.off_target_search",
    "offtarget.core.result_store",
    "offtarget.utils.file_io",
    "offtarget.utils.pam_catalog",
    "offtarget.utils.result_formatter",
    "offtarget.utils.sequence_utils",
    "offtarget.config.config",
    "offtarget.config.config_display",
)

FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
DEBUG_CONSOLE_FORMAT = '%(levelname)-8s [%(name)s] %(message)s'
CONSOLE_FORMAT = '%(message)s'


class ModuleDebugConfig:
    """
    Module names known to the debug selector.

    Attributes:
        MODULE_DEBUG_LEVELS: Default level (INFO) for each package module
        FILENAME_TO_MODULE: Short name (e.g. ``seed_scanner``) to full module path

    Example:
        >>> ModuleDebugConfig.FILENAME_TO_MODULE['seed_scanner']
        'offtarget.core.seed_scanner'
    """

    MODULE_DEBUG_LEVELS = {module: logging.INFO for module in PACKAGE_MODULES}
    FILENAME_TO_MODULE = {module.rsplit('.', 1)[-1]: module for module in PACKAGE_MODULES}


class ColorFormatter(logging.Formatter):
    """Formatter that wraps each message in an ANSI color chosen by level."""

    LEVEL_COLORS = {
        logging.DEBUG: '\033[37m',
        logging.INFO: '\033[1;37m',
        logging.WARNING: '\033[33m',
        logging.ERROR: '\033[31m',
        logging.CRITICAL: '\033[35m',
    }
    RESET = '\033[0m'

    def __init__(self, fmt=None, datefmt=None, use_colors=False):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors

    def format(self, record):
        message = super().format(record)
        color = self.LEVEL_COLORS.get(record.levelno)
        if not self.use_colors or color is None:
            return message
        return f"{color}{message}{self.RESET}"


class ModuleLevelFilter(logging.Filter):
    """
    Drops records below the level configured for their module.

    The most specific configured prefix of the logger name wins. Loggers
    outside the configuration are held at INFO.

    Example:
        >>> handler.addFilter(ModuleLevelFilter({'offtarget.core': logging.DEBUG}))
    """

    def __init__(self, module_levels: Dict[str, int]):
        super().__init__()
        self.module_levels = module_levels

    def threshold(self, name: str) -> int:
        while name:
            if name in self.module_levels:
                return self.module_levels[name]
            name = name.rpartition('.')[0]
        return logging.INFO

    def filter(self, record):
        return record.levelno >= self.threshold(record.name)


def setup_logging(debug: Union[bool, List[str], str] = False, log_dir: Optional[str] = None) -> str:
    """
    Configure root logging for a pipeline run.

    Args:
        debug: False for normal output, True for debug output in every
            module, or one or more short module names to debug
        log_dir: Directory for the log file, defaults to the logs folder of
            the user configuration directory

    Returns:
        str: Path to the created log file

    Raises:
        LoggingConfigError: If the log file cannot be created

    Example:
        >>> log_file = setup_logging(debug=['pipeline', 'off_target_search'])
    """
    from .config import Config

    debug_enabled, debug_modules = _normalize_debug_input(debug)
    module_levels = _module_levels(debug_enabled, debug_modules)
    level = logging.DEBUG if debug_enabled else logging.INFO

    try:
        if log_dir is None:
            log_dir = os.path.join(Config.get_user_config_dir(), "logs")
        os.makedirs(log_dir, exist_ok=True)
        log_file = os.path.join(log_dir, f"{PACKAGE}_{datetime.now():%Y%m%d_%H%M%S}.log")
        file_handler = logging.FileHandler(log_file)
    except (OSError, ConfigError) as e:
        error_msg = "Failed to setup logging configuration"
        print(f"ERROR: {error_msg}: {str(e)}")  # No handlers exist yet
        raise LoggingConfigError(error_msg) from e

    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    if debug_enabled:
        console_handler.setFormatter(ColorFormatter(DEBUG_CONSOLE_FORMAT, use_colors=True))
        console_handler.addFilter(ModuleLevelFilter(module_levels))
    else:
        console_handler.setFormatter(ColorFormatter(CONSOLE_FORMAT))

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    package_logger = logging.getLogger(PACKAGE)
    if debug_enabled:
        package_logger.debug(f"Debug logging enabled, log file: {log_file}")
        if debug_modules:
            unknown = [name for name in debug_modules if _resolve_module_name(name) is None]
            package_logger.debug(f"Debug modules: {', '.join(debug_modules)}")
            if unknown:
                package_logger.warning(f"Unknown module names: {', '.join(unknown)}")

    Config.DEBUG_MODE = debug_enabled
    return log_file


def _module_levels(debug_enabled: bool, debug_modules: Optional[List[str]]) -> Dict[str, int]:
    levels = dict(ModuleDebugConfig.MODULE_DEBUG_LEVELS)
    if debug_modules:
        for name in debug_modules:
            module = _resolve_module_name(name)
            if module:
                levels[module] = logging.DEBUG
    elif debug_enabled:
        levels = {module: logging.DEBUG for module in levels}
        levels[PACKAGE] = logging.DEBUG
    return levels


def _normalize_debug_input(debug: Union[bool, List[str], str, None]) -> Tuple[bool, Optional[List[str]]]:
    """
    Turn the --debug value into (debug_enabled, debug_modules).

    Example:
        >>> _normalize_debug_input(['pipeline', 'seed_scanner'])
        (True, ['pipeline', 'seed_scanner'])
    """
    if isinstance(debug, bool):
        return debug, None
    if isinstance(debug, str):
        return True, [debug]
    if isinstance(debug, list):
        return True, (debug or None)
    return False, None


def _resolve_module_name(name: str) -> Optional[str]:
    """
    Resolve a short or full module name to the full module path.

    Example:
        >>> _resolve_module_name('pipeline')
        'offtarget.pipeline'
    """
    if name in ModuleDebugConfig.MODULE_DEBUG_LEVELS:
        return name
    return ModuleDebugConfig.FILENAME_TO_MODULE.get(name)


class LoggingConfigError(Exception):
    """The log file or its directory could not be created."""
    pass
