#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
File I/O module for the offtarget pipeline.

Contains functionality for:
1. Loading single-chromosome text files (header line + sequence lines)
2. Loading multi-record FASTA files with Biopython
3. Loading a directory of human chromosome files
4. Saving search results to CSV or Excel

All loaded sequences are returned upper-case, keyed by their label, in
file order.
"""

import os
import logging
from typing import Dict, Optional

from Bio import SeqIO

# Import package modules
from ..config import Config, FileError, FileFormatError
from .result_formatter import ResultFormatter

# Set up module logger
logger = logging.getLogger(__name__)


class FileIO:
    """
    Loading of genomic sequences and saving of results.

    Example:
        >>> sequences = FileIO.load_fasta("genome.fasta")
        >>> chromosome = FileIO.load_chromosome_text("human_chromosome_1.txt")
    """

    @staticmethod
    def load_chromosome_text(filepath) -> str:
        """
        Load a chromosome from a plain text file.

        The first line is a header and is skipped; all remaining lines are
        concatenated without their line endings.

        Args:
            filepath: Path to the chromosome text file

        Returns:
            Upper-case sequence

        Raises:
            FileError: If the file doesn't exist or cannot be read
        """
        if not os.path.exists(filepath):
            error_msg = f"Chromosome file not found: {filepath}"
            logger.error(error_msg)
            raise FileError(error_msg)

        try:
            with open(filepath, 'r') as f:
                f.readline()
                sequence = "".join(line.strip() for line in f).upper()
        except (OSError, UnicodeDecodeError) as e:
            error_msg = f"Error reading chromosome file {os.path.abspath(filepath)}: {str(e)}"
            logger.error(error_msg)
            logger.debug(f"Error details: {str(e)}", exc_info=True)
            raise FileError(error_msg) from e

        logger.debug(f"Loaded {len(sequence)} nucleotides from {filepath}")
        return sequence

    @staticmethod
    def load_fasta(filepath) -> Dict[str, str]:
        """
        Load sequences from a FASTA file into a dictionary.

        Args:
            filepath: Path to the FASTA file

        Returns:
            Dictionary mapping record IDs to upper-case sequences, in file order

        Raises:
            FileError: If the FASTA file doesn't exist or cannot be read
            FileFormatError: If the file holds no records or duplicate IDs
        """
        if not os.path.exists(filepath):
            error_msg = f"FASTA file not found: {filepath}"
            logger.error(error_msg)
            raise FileError(error_msg)

        sequences = {}
        try:
            for record in SeqIO.parse(filepath, "fasta"):
                if record.id in sequences:
                    error_msg = f"Duplicate sequence ID '{record.id}' in FASTA file {filepath}"
                    logger.error(error_msg)
                    raise FileFormatError(error_msg)
                sequences[record.id] = str(record.seq).upper()
        except (OSError, UnicodeDecodeError) as e:
            error_msg = f"Error reading FASTA file {os.path.abspath(filepath)}: {str(e)}"
            logger.error(error_msg)
            logger.debug(f"Error details: {str(e)}", exc_info=True)
            raise FileError(error_msg) from e

        if not sequences:
            error_msg = f"No sequences found in FASTA file {filepath}"
            logger.error(error_msg)
            raise FileFormatError(error_msg)

        logger.debug(f"Successfully loaded {len(sequences)} sequences from FASTA file")
        return sequences

    @classmethod
    def load_human_genome(cls, directory, show_progress: Optional[bool] = None) -> Dict[str, str]:
        """
        Load all human chromosome files from a directory.

        Files are named after Config.HUMAN_CHROMOSOME_FILE_TEMPLATE
        (``human_chromosome_1.txt`` .. ``human_chromosome_Y.txt``) and are
        labelled "1".."22", "X", "Y" in that order.

        Args:
            directory: Directory containing the chromosome files
            show_progress: Log each chromosome as it loads, defaults to Config.SHOW_PROGRESS

        Returns:
            Ordered dictionary of chromosome label to sequence

        Raises:
            FileError: If the directory or any chromosome file is missing
        """
        if not os.path.isdir(directory):
            error_msg = f"Genome directory not found: {directory}"
            logger.error(error_msg)
            raise FileError(error_msg)

        if show_progress is None:
            show_progress = Config.SHOW_PROGRESS

        chromosomes = {}
        for label in Config.HUMAN_CHROMOSOMES:
            filename = Config.HUMAN_CHROMOSOME_FILE_TEMPLATE.format(label)
            chromosomes[label] = cls.load_chromosome_text(os.path.join(directory, filename))
            if show_progress:
                logger.info(f"Chromosome {label} inputted.")

        return chromosomes

    @staticmethod
    def save_results(store, output_file) -> str:
        """
        Save search results to a CSV or Excel file.

        The format follows the file extension: ``.xlsx`` writes an Excel
        workbook, anything else writes CSV.

        Args:
            store: ResultStore with the hits to save
            output_file: Path of the output file

        Returns:
            Path to the output file

        Raises:
            FileFormatError: If the results cannot be written
        """
        output_dir = os.path.dirname(os.path.abspath(output_file))
        try:
            os.makedirs(output_dir, exist_ok=True)
        except OSError as e:
            error_msg = f"Failed to create output directory {output_dir}: {str(e)}"
            logger.error(error_msg)
            logger.debug(f"Error details: {str(e)}", exc_info=True)
            raise FileFormatError(error_msg) from e

        df = ResultFormatter.to_dataframe(store)

        try:
            if output_file.lower().endswith(".xlsx"):
                df.to_excel(output_file, index=False, sheet_name="Off-targets", engine="openpyxl")
            else:
                df.to_csv(output_file, index=False)
        except (OSError, ValueError) as e:
            error_msg = f"Error saving results to {output_file}: {str(e)}"
            logger.error(error_msg)
            logger.debug(f"Error details: {str(e)}", exc_info=True)
            raise FileFormatError(error_msg) from e

        logger.debug(f"Saved {len(df)} hits to {output_file}")
        return output_file
