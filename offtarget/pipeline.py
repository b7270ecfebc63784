#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
offtarget Pipeline

Predicts potential off-target sites of a CRISPR guide in a genome:
1. Select a PAM from the catalog (or give a pattern verbatim)
2. Enter the guide RNA and the number of mismatches allowed
3. Load a FASTA file, a chromosome text file, a directory of human
   chromosomes, or generate a random sequence
4. Search each sequence for seed + PAM sites and compare the rest of the guide
5. Print hits grouped by mismatch count, optionally saving them to CSV/Excel

Any input not given on the command line is prompted for interactively.
"""

import sys
import argparse
import logging
import traceback

# Import package modules
from .config import Config, setup_logging, display_config, OffTargetError, ConfigError
from .core import OffTargetSearch
from .utils import FileIO, PAMCatalog, ResultFormatter, SequenceUtils

# Set up module logger
logger = logging.getLogger(__name__)


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='offtarget: CRISPR off-target site prediction',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        usage='offtarget [--guide SEQ] [--pam PAM] [--mismatches N]\n'
              '                 [--fasta FILE | --chromosome FILE | --human-genome DIR | --random LENGTH]\n'
              '                 [--label NAME] [--output FILE] [--processes N]\n'
              '                 [--config [.json]] [--debug [MODULE...]] [--list-pams]',
        epilog='PAM catalog:\n' + PAMCatalog.describe()
    )

    search_group = parser.add_argument_group('search')
    input_group = parser.add_argument_group('inputs (one of)')
    option_group = parser.add_argument_group('options')

    search_group.add_argument('--guide', metavar='SEQ', help="5' to 3' guide RNA or DNA sequence")
    search_group.add_argument('--pam', metavar='PAM',
                              help='PAM catalog number (1-12) or IUPAC pattern such as NGG')
    search_group.add_argument('--mismatches', metavar='N', type=int,
                              help=f'Mismatches allowed ({Config.MIN_MISMATCHES}-{Config.MAX_MISMATCHES})')

    sources = input_group.add_mutually_exclusive_group()
    sources.add_argument('--fasta', metavar='[.fasta]', help='FASTA file with one or more sequences')
    sources.add_argument('--chromosome', metavar='FILE', help='Chromosome text file (header line + sequence)')
    sources.add_argument('--human-genome', metavar='DIR', dest='human_genome',
                         help='Directory of human_chromosome_{1..22,X,Y}.txt files')
    sources.add_argument('--random', metavar='LENGTH', type=int, help='Search a random sequence of this length')
    input_group.add_argument('--label', metavar='NAME', help='Chromosome name for --chromosome or --random')

    option_group.add_argument('--output', metavar='FILE', help='Save results to .csv or .xlsx')
    option_group.add_argument('--processes', metavar='N', type=int,
                              help='Worker processes across sequences (default: Config.NUM_PROCESSES)')
    option_group.add_argument('--seed', metavar='N', type=int, help='Random seed for --random')
    option_group.add_argument('--config', metavar='[.json]', nargs='?', const='DISPLAY',
                              help='Configuration file, or display settings if no file given')
    option_group.add_argument('--debug', nargs='*', metavar='MODULE',
                              help='Enable debug mode (universal or specific modules)')
    option_group.add_argument('--list-pams', action='store_true', dest='list_pams',
                              help='List the PAM catalog and exit')
    option_group.add_argument('--quiet', action='store_true', help='Disable progress output')

    args = parser.parse_args(argv)

    # Process debug argument
    if args.debug is not None:
        args.debug = True if len(args.debug) == 0 else args.debug
    else:
        args.debug = False

    if args.processes is not None and args.processes < 1:
        parser.error("--processes must be at least 1")

    return args


def setup_pipeline(args):
    """Set up logging and configuration. Returns False if the run should stop here."""
    setup_logging(debug=args.debug)

    logger.debug("Initializing offtarget pipeline")
    Config.get_instance()

    if args.config == 'DISPLAY':
        display_config(Config)
        return False

    if args.config:
        Config.load_from_file(args.config)
        logger.debug(f"Loaded configuration from {args.config}")

    if args.quiet:
        Config.SHOW_PROGRESS = False

    if args.list_pams:
        print(PAMCatalog.describe())
        return False

    return True


#############################################################################
#                          Interactive Prompts
#############################################################################

def prompt_integer(prompt, minimum=None, maximum=None, retry_prompt=None):
    """Prompt until the user enters an integer within [minimum, maximum]."""
    while True:
        raw = input(prompt).strip()
        try:
            value = int(raw)
        except ValueError:
            prompt = "Illegal integer format. Try again: "
            continue
        if (minimum is not None and value < minimum) or (maximum is not None and value > maximum):
            prompt = retry_prompt or f"Not in the correct range of {minimum} - {maximum}, please re-enter: "
            continue
        return value


def prompt_yes_no(prompt):
    """Prompt until the user answers yes or no."""
    while True:
        answer = input(prompt).strip().lower()
        if answer in ("y", "yes"):
            return True
        if answer in ("n", "no"):
            return False
        prompt = "Please type a word that starts with 'Y' or 'N': "


def resolve_pam(args):
    """PAM from --pam, the configured default, or chosen interactively from the catalog."""
    if args.pam:
        return PAMCatalog.resolve(args.pam)
    if args.guide:
        return PAMCatalog.resolve(Config.DEFAULT_PAM)

    print(PAMCatalog.describe())
    number = prompt_integer(
        "Choose the number of one of the PAM (Protospacer Adjacent Motif) sequences above: ",
        1, len(PAMCatalog.TEMPLATES)
    )
    return PAMCatalog.get(number).pattern


def resolve_guide(args):
    """Guide from --guide, or entered interactively with its length."""
    if args.guide:
        return SequenceUtils.validate_guide(args.guide)

    length = prompt_integer(
        f"Enter the length of the guide RNA sequence (between {Config.MIN_GUIDE_LENGTH} - "
        f"{Config.MAX_GUIDE_LENGTH} nucleotides): ",
        Config.MIN_GUIDE_LENGTH, Config.MAX_GUIDE_LENGTH,
        retry_prompt=f"Not in the correct range of {Config.MIN_GUIDE_LENGTH} - "
                     f"{Config.MAX_GUIDE_LENGTH}, please re-enter the length: "
    )
    guide = input(f"Enter the 5' to 3' {length}-nucleotide guide RNA sequence to be edited with CRISPR: ")
    while True:
        try:
            return SequenceUtils.validate_guide(guide, expected_length=length)
        except OffTargetError as e:
            logger.debug(f"Rejected guide: {e}")
            if len(guide.strip()) != length:
                guide = input(f"Sequence entered is not {length} nucleotides long, please re-enter the sequence: ")
            else:
                guide = input("The sequence entered is invalid, please re-enter: ")


def resolve_mismatches(args):
    """Mismatch budget from --mismatches, the configured default, or entered interactively."""
    if args.mismatches is not None:
        return SequenceUtils.validate_mismatches(args.mismatches)
    if args.guide:
        return SequenceUtils.validate_mismatches(Config.DEFAULT_MISMATCHES)

    return prompt_integer(
        f"Enter the number of mismatches allowed (between {Config.MIN_MISMATCHES} - {Config.MAX_MISMATCHES}): ",
        Config.MIN_MISMATCHES, Config.MAX_MISMATCHES,
        retry_prompt=f"Not in the correct range of {Config.MIN_MISMATCHES} - {Config.MAX_MISMATCHES}, "
                     f"please re-enter the number of mismatches: "
    )


def load_sequences(args):
    """Load the labelled sequences to search, prompting if no source was given."""
    if args.fasta:
        logger.info(f"Loading sequences from {args.fasta}...")
        return FileIO.load_fasta(args.fasta)

    if args.chromosome:
        label = args.label or input("Chromosome name: ").strip()
        return {label: FileIO.load_chromosome_text(args.chromosome)}

    if args.human_genome:
        logger.info(f"Loading human genome from {args.human_genome}...")
        return FileIO.load_human_genome(args.human_genome)

    if args.random is not None:
        return {args.label or Config.RANDOM_SEQUENCE_LABEL: _random_sequence(args.random, args.seed)}

    if prompt_yes_no("Do you want to import a sequence? "):
        if prompt_yes_no("Do you want to import the human genome? "):
            directory = input("Enter the directory containing the human chromosome files: ").strip()
            return FileIO.load_human_genome(directory)

        filename = input("Enter the name of the file for the chromosome: ").strip()
        label = input("Chromosome name: ").strip()
        return {label: FileIO.load_chromosome_text(filename)}

    length = prompt_integer("Enter the length of a random DNA sequence: ", 0)
    return {Config.RANDOM_SEQUENCE_LABEL: _random_sequence(length, args.seed)}


def _random_sequence(length, seed):
    if length < 0:
        raise ConfigError(f"Random sequence length must be non-negative, got {length}")
    sequence = SequenceUtils.generate_random_sequence(length, seed=seed)
    logger.info("Random Sequence Generated.")
    return sequence


#############################################################################
#                          Workflow
#############################################################################

def run_search(args):
    """Collect inputs, run the search and report the results."""
    pam = resolve_pam(args)
    guide = resolve_guide(args)
    mismatches = resolve_mismatches(args)
    buffers = load_sequences(args)

    logger.debug(f"Guide={guide}, PAM={pam}, mismatches={mismatches}, sequences={list(buffers)}")
    logger.info("Predicting off-target edits... ")

    search = OffTargetSearch(guide, pam, mismatches)
    store = search.search_buffers(buffers, max_workers=args.processes)

    logger.info(ResultFormatter.summarize(store))
    ResultFormatter.print_results(store)

    if args.output:
        output_path = FileIO.save_results(store, args.output)
        logger.info(f"Results saved to: {output_path}")

    return store


def run_pipeline(argv=None):
    """Main pipeline entry point."""
    try:
        args = parse_arguments(argv)

        if not setup_pipeline(args):
            return True

        logger.info("=== offtarget: CRISPR Off-Target Prediction ===")
        run_search(args)
        logger.info("=== Pipeline completed successfully! ===")
        return True

    except OffTargetError as e:
        logger.error(f"Pipeline error: {e}")
        return False
    except (KeyboardInterrupt, EOFError):
        logger.warning("Pipeline interrupted")
        return False
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        logger.debug(traceback.format_exc())
        return False


def main():
    """Entry point for direct execution."""
    success = run_pipeline()
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
