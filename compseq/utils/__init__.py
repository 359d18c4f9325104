# compseq/utils/__init__.py
"""
Utility subpackage for compseq: logging and sequence archive helpers.
"""

# logging
from .log import setup_logger, get_logger, display_config

# helper functions
from .helpers import (
    read_fasta,
    validate_sequence,
    results_to_dataframe,
    write_results_csv,
    RESULT_COLUMNS,
)

__all__ = [
    # logging
    "setup_logger",
    "get_logger",
    "display_config",
    # helpers
    "read_fasta",
    "validate_sequence",
    "results_to_dataframe",
    "write_results_csv",
    "RESULT_COLUMNS",
]
