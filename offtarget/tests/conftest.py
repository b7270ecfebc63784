#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Shared pytest fixtures for offtarget tests.

This file contains fixtures that can be reused across multiple test modules.
"""

import logging
import warnings

import pytest

# Import package modules
from ..config import Config


# ============== Suppress all logging completely ===============
class NullHandler(logging.Handler):
    def emit(self, record):
        pass


def silence_logger(logger_name):
    """Completely silence a logger by name."""
    logger = logging.getLogger(logger_name)
    logger.setLevel(logging.CRITICAL)
    logger.propagate = False
    logger.handlers = []
    logger.addHandler(NullHandler())


# Silence potentially noisy third-party loggers
silence_logger("tqdm")
silence_logger("openpyxl")

# Set root logger to only show errors or higher
logging.getLogger().setLevel(logging.ERROR)

warnings.filterwarnings("ignore")


def pytest_configure(config):
    """Disable all logging messages during testing."""
    logging.disable(logging.CRITICAL)


def pytest_runtest_setup(item):
    """Reset log levels before each test runs."""
    logging.disable(logging.CRITICAL)


# ============== Configuration isolation ===============

@pytest.fixture(autouse=True)
def restore_config():
    """Restore Config class attributes after each test and disable progress bars."""
    saved = Config.get_all_settings()
    Config.SHOW_PROGRESS = False
    Config.NUM_PROCESSES = 1
    yield
    for key, value in saved.items():
        setattr(Config, key, value)


# ============== Sequence fixtures ===============

@pytest.fixture
def guide():
    """20-nt guide used in the concrete search scenarios."""
    return "ATGCATGCATGCATGCATGC"


@pytest.fixture
def site_with_one_mismatch():
    """
    Guide window with one substitution (index 5, T->A) followed by AGG.

    Placed at 0-based offset 10 in a poly-T background, which contains
    no occurrence of the TGC seed.
    """
    window = "ATGCAAGCATGCATGCATGC"
    return "T" * 10 + window + "AGG" + "T" * 10


@pytest.fixture
def create_chromosome_file(tmp_path):
    """Factory writing a chromosome text file (header + wrapped sequence lines)."""
    def _create(sequence, name="chromosome.txt", header="chromosome header", width=60):
        path = tmp_path / name
        lines = [header] + [sequence[i:i + width] for i in range(0, len(sequence), width)]
        path.write_text("\n".join(lines) + "\n")
        return str(path)
    return _create


@pytest.fixture
def create_fasta_file(tmp_path):
    """Factory writing a multi-record FASTA file from a {id: sequence} dict."""
    def _create(records, name="genome.fasta", width=60):
        path = tmp_path / name
        with open(path, "w") as f:
            for record_id, sequence in records.items():
                f.write(f">{record_id} test record\n")
                for i in range(0, len(sequence), width):
                    f.write(sequence[i:i + width] + "\n")
        return str(path)
    return _create
