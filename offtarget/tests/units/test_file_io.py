#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Unit tests for FileIO.
"""

import os

import pandas as pd
import pytest

# Import package modules
from ...config import Config, FileError, FileFormatError
from ...core import Hit, ResultStore
from ...utils import FileIO


class TestChromosomeText:
    """Tests for loading chromosome text files."""

    def test_header_skipped_and_lines_joined(self, create_chromosome_file):
        sequence = "ACGT" * 40
        path = create_chromosome_file(sequence, header=">NC_000001 chromosome 1", width=50)
        assert FileIO.load_chromosome_text(path) == sequence

    def test_sequence_upper_cased(self, create_chromosome_file):
        path = create_chromosome_file("acgtnNacgt")
        assert FileIO.load_chromosome_text(path) == "ACGTNNACGT"

    def test_windows_line_endings(self, tmp_path):
        path = tmp_path / "crlf.txt"
        path.write_bytes(b"header\r\nACGT\r\nTTGG\r\n")
        assert FileIO.load_chromosome_text(str(path)) == "ACGTTTGG"

    def test_header_only(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text("header only\n")
        assert FileIO.load_chromosome_text(str(path)) == ""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileError):
            FileIO.load_chromosome_text(str(tmp_path / "missing.txt"))


class TestFasta:
    """Tests for loading FASTA files."""

    def test_records_in_file_order(self, create_fasta_file):
        records = {"chr2": "acgt" * 30, "chr1": "TTGGCCAA" * 5}
        path = create_fasta_file(records)
        loaded = FileIO.load_fasta(path)
        assert list(loaded) == ["chr2", "chr1"]
        assert loaded["chr2"] == "ACGT" * 30
        assert loaded["chr1"] == "TTGGCCAA" * 5

    def test_duplicate_ids(self, tmp_path):
        path = tmp_path / "dup.fasta"
        path.write_text(">seq1\nACGT\n>seq1\nTTTT\n")
        with pytest.raises(FileFormatError):
            FileIO.load_fasta(str(path))

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.fasta"
        path.write_text("")
        with pytest.raises(FileFormatError):
            FileIO.load_fasta(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileError):
            FileIO.load_fasta(str(tmp_path / "missing.fasta"))


class TestHumanGenome:
    """Tests for loading a directory of human chromosome files."""

    def setup_method(self):
        Config.HUMAN_CHROMOSOMES = ["1", "2", "X"]

    def _write_genome(self, directory):
        for index, label in enumerate(Config.HUMAN_CHROMOSOMES):
            path = directory / Config.HUMAN_CHROMOSOME_FILE_TEMPLATE.format(label)
            path.write_text(f">chromosome {label}\n" + "ACGT" * (index + 1) + "\n")

    def test_loads_in_chromosome_order(self, tmp_path):
        self._write_genome(tmp_path)
        genome = FileIO.load_human_genome(str(tmp_path), show_progress=True)
        assert list(genome) == ["1", "2", "X"]
        assert genome["1"] == "ACGT"
        assert genome["X"] == "ACGT" * 3

    def test_default_file_names(self):
        Config.HUMAN_CHROMOSOMES = [str(i) for i in range(1, 23)] + ["X", "Y"]
        names = [Config.HUMAN_CHROMOSOME_FILE_TEMPLATE.format(label) for label in Config.HUMAN_CHROMOSOMES]
        assert names[0] == "human_chromosome_1.txt"
        assert names[-1] == "human_chromosome_Y.txt"
        assert len(names) == 24

    def test_missing_chromosome_file(self, tmp_path):
        self._write_genome(tmp_path)
        os.remove(tmp_path / "human_chromosome_2.txt")
        with pytest.raises(FileError):
            FileIO.load_human_genome(str(tmp_path))

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileError):
            FileIO.load_human_genome(str(tmp_path / "nowhere"))


class TestSaveResults:
    """Tests for saving results."""

    def setup_method(self):
        self.store = ResultStore(1)
        self.store.insert(0, Hit(5, "1", "ATGCATGCATGCATGCATGCTGG", 0))
        self.store.insert(1, Hit(11, "2", "ATGCAaGCATGCATGCATGCAGG", 1))

    def test_save_csv(self, tmp_path):
        output = str(tmp_path / "results" / "hits.csv")
        assert FileIO.save_results(self.store, output) == output

        df = pd.read_csv(output)
        assert list(df.columns) == ["Mismatches", "Chromosome", "Position", "Sequence"]
        assert df["Position"].tolist() == [5, 11]
        assert df["Sequence"].tolist()[1] == "ATGCAaGCATGCATGCATGCAGG"

    def test_save_excel(self, tmp_path):
        output = str(tmp_path / "hits.xlsx")
        FileIO.save_results(self.store, output)

        df = pd.read_excel(output, sheet_name="Off-targets", engine="openpyxl")
        assert len(df) == 2
        assert df["Mismatches"].tolist() == [0, 1]

    def test_save_empty_store(self, tmp_path):
        output = str(tmp_path / "none.csv")
        FileIO.save_results(ResultStore(2), output)
        df = pd.read_csv(output)
        assert df.empty
