#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Configuration display module for the offtarget pipeline.

Backs ``offtarget --config`` (no file): prints every setting grouped the
same way as the sections of config.py.
"""

import json
import textwrap

import colorama
from colorama import Fore, Style

WIDTH = 80

CATEGORIES = {
    "Pipeline Mode Options": ["DEBUG_MODE"],
    "Performance Settings": ["NUM_PROCESSES", "SHOW_PROGRESS"],
    "Search Parameters": [
        "SEED_LENGTH", "DEFAULT_PAM", "DEFAULT_MISMATCHES",
        "MIN_GUIDE_LENGTH", "MAX_GUIDE_LENGTH", "MIN_MISMATCHES", "MAX_MISMATCHES",
    ],
    "Genome Input Options": [
        "HUMAN_CHROMOSOMES", "HUMAN_CHROMOSOME_FILE_TEMPLATE", "RANDOM_SEQUENCE_LABEL",
    ],
}

EXAMPLE_OVERRIDES = {"DEFAULT_PAM": "NRG", "DEFAULT_MISMATCHES": 2, "NUM_PROCESSES": 4}


def _format_value(value):
    text = str(value)
    if isinstance(value, list) and len(text) > 60:
        return "\n" + textwrap.indent(textwrap.fill(text, WIDTH - 4), " " * 4)
    return text


def _rule(color):
    print(f"{color}{'=' * WIDTH}{Style.RESET_ALL}")


def display_config(config_cls):
    """
    Print all settings of ``config_cls`` grouped by category.

    Settings not listed in a category are shown under "Other".

    Args:
        config_cls: The Config class
    """
    colorama.init()

    settings = config_cls.get_all_settings()
    listed = {key for keys in CATEGORIES.values() for key in keys}
    groups = dict(CATEGORIES)
    others = sorted(key for key in settings if key not in listed)
    if others:
        groups["Other"] = others

    print()
    _rule(Fore.CYAN)
    print(f"{Fore.CYAN}{'offtarget Configuration Settings':^{WIDTH}}{Style.RESET_ALL}")
    _rule(Fore.CYAN)
    print()

    for title, keys in groups.items():
        print(f"{Fore.GREEN}{title}\n{'-' * len(title)}{Style.RESET_ALL}")
        for key in keys:
            if key in settings:
                print(f"{Fore.YELLOW}{key}{Style.RESET_ALL}: {_format_value(settings[key])}")
        print()

    _rule(Fore.CYAN)
    print(f"\n{Fore.WHITE}Configuration Options:{Style.RESET_ALL}")
    print(f"- View settings: {Fore.YELLOW}offtarget --config{Style.RESET_ALL}")
    print(f"- Use custom config: {Fore.YELLOW}offtarget --config your_config.json{Style.RESET_ALL}")
    print("\nExample config file format:")
    print(f"{Fore.BLUE}{json.dumps(EXAMPLE_OVERRIDES, indent=4)}{Style.RESET_ALL}\n")
