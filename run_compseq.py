"""
run_compseq.py

Main executable for compseq: aligns every pair of records of a FASTA file
and reports identity and similarity percentages.
"""

import argparse
import sys
from pathlib import Path

from biotite.file import InvalidFileError

from compseq import AlignmentMode, AlphabetError, InvalidMode, ScoringModel
from compseq.comparison import iter_all_pairs
from compseq.utils import read_fasta, write_results_csv
from compseq.utils.log import get_logger, setup_logger, display_config


def main(args) -> int:
    """
    Main function for running compseq.

    Args:
        args: Command line arguments.

    Returns:
        int: The exit status.
    """
    # Setup logger
    setup_logger(verbose=args.verbose, log_filename=args.log_filename)
    logger = get_logger("run_compseq")
    display_config(args, config_name="compseq Run Arguments:")

    # --- 1. Validate Settings ---
    try:
        mode = AlignmentMode.parse(args.mode)
    except InvalidMode as err:
        logger.error(str(err))
        return 2
    if args.num_workers < 1:
        logger.error(f"num_workers must be at least 1, got {args.num_workers}")
        return 2
    print(f"Running alignment in mode: {mode.value}")

    # --- 2. Load Inputs ---
    logger.info(f"Loading sequences from {args.input}")
    scoring = ScoringModel.blosum62()
    try:
        records = read_fasta(args.input, validate=True, scoring=scoring)
    except AlphabetError as err:
        logger.error(f"Invalid sequence in {args.input}: {err}")
        return 1
    except (FileNotFoundError, InvalidFileError) as err:
        logger.error(f"Cannot read {args.input}: {err}")
        return 1
    logger.debug(f"Loaded {len(records)} records")
    if len(records) < 2:
        logger.warning("Fewer than two records, nothing to compare")

    # --- 3. Align All Pairs ---
    # Results are printed as they arrive, rows are only kept for the CSV
    rows = []
    for result in iter_all_pairs(
        records,
        mode=mode,
        scoring=scoring,
        num_workers=args.num_workers,
        progress=args.progress,
    ):
        print(result, flush=True)
        if args.output_csv is not None:
            rows.append(result.to_dict())

    # --- 4. Save Results ---
    if args.output_csv is not None:
        path = write_results_csv(rows, args.output_csv)
        logger.info(f"Results saved to: {path}")

    return 0


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def get_cli_args(argv=None):
    """Parses command line arguments."""
    parser = argparse.ArgumentParser(
        description="Pairwise alignment of all records of a FASTA file.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    # --- Input Files ---
    inputs = parser.add_argument_group('Input Files')
    inputs.add_argument('-i', '--input', type=Path, required=True, help='Path to the FASTA file.')

    # --- Alignment Settings ---
    alignment = parser.add_argument_group('Alignment Settings')
    alignment.add_argument(
        '-m',
        '--mode',
        type=str,
        required=True,
        help='Alignment mode, either "global" (Needleman-Wunsch) or "local" (Smith-Waterman).'
    )
    alignment.add_argument('--num_workers', type=positive_int, default=1, help='Number of worker processes.')

    # --- Output Settings ---
    outputs = parser.add_argument_group('Output Settings')
    outputs.add_argument('--output_csv', type=Path, default=None, help='(Optional) Write all results to this CSV file.')
    outputs.add_argument('--log_filename', type=str, default=None, help='(Optional) Name for the log file.')

    # --- General ---
    general = parser.add_argument_group('General')
    general.add_argument('--verbose', action='store_true', help='Enable verbose logging to console.')
    general.add_argument('--progress', action='store_true', help='Show a progress bar.')

    return parser.parse_args(argv)


if __name__ == "__main__":
    args = get_cli_args()
    sys.exit(main(args))
