"""
log.py

Logging for compseq. Results are printed to stdout by the command line tool,
so console logging writes to stderr (or to the cell output in a notebook).
"""

import argparse
import logging
import os
import sys
import threading
from typing import Any, Dict, List, Optional, Union

import coloredlogs
from IPython import get_ipython

from compseq.paths import LOG_DIR


LOGGER_PREFIXES = ("compseq", "run_compseq")

CONSOLE_FORMAT = "%(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False
_setup_lock = threading.Lock()


def is_running_in_notebook() -> bool:
    shell = get_ipython().__class__.__name__
    if shell == "ZMQInteractiveShell":
        return True
    # Kernel started without an interactive shell, e.g. papermill
    return shell == "NoneType" and "ipykernel" in sys.modules


class CompseqFilter(logging.Filter):
    """Drops records from third-party loggers (numpy, biotite, ...)."""

    def filter(self, record):
        return record.name.startswith(LOGGER_PREFIXES)


class NotebookFormatter(logging.Formatter):
    def format(self, record):
        message = super().format(record)
        if record.levelno >= logging.WARNING:
            return f"[{record.levelname}] {message}"
        return message


def _log_file_path(
    log_filename: str,
    logging_subdir: Optional[str],
    log_dir: Optional[Union[str, os.PathLike]],
) -> str:
    parts = [str(log_dir) if log_dir is not None else str(LOG_DIR)]
    if logging_subdir is not None:
        parts.append(logging_subdir)
    parts.append(log_filename if log_filename.endswith(".log") else f"{log_filename}.log")
    return os.path.join(*parts)


def _add_console_handler(root_logger: logging.Logger, level: int):
    if is_running_in_notebook():
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(NotebookFormatter())
        handler.addFilter(CompseqFilter())
        root_logger.addHandler(handler)
    else:
        coloredlogs.install(
            level=level,
            fmt=CONSOLE_FORMAT,
            stream=sys.stderr,
            custom_filters=[CompseqFilter()],
        )


def setup_logger(
    verbose: bool = False,
    log_filename: Optional[str] = None,
    logging_subdir: Optional[str] = None,
    log_dir: Optional[Union[str, os.PathLike]] = None,
) -> Optional[str]:
    """
    Configures the root logger. Calling it again replaces the previous handlers.

    Args:
        verbose (bool): Log DEBUG messages to the console (INFO otherwise).
        log_filename (Optional[str]): If given, also log everything (DEBUG and
            up) to this file. A '.log' suffix is added when missing.
        logging_subdir (Optional[str]): Subdirectory of the log directory
            for the log file.
        log_dir (Optional[str]): Log directory (default: `<repository>/logs`).

    Returns:
        Optional[str]: The path of the log file, None without file logging.
    """
    global _configured

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    # DEBUG records are only created when some handler keeps them
    root_logger.setLevel(
        logging.DEBUG if verbose or log_filename is not None else logging.INFO
    )

    _add_console_handler(root_logger, logging.DEBUG if verbose else logging.INFO)

    log_filepath = None
    if log_filename is not None:
        log_filepath = _log_file_path(log_filename, logging_subdir, log_dir)
        os.makedirs(os.path.dirname(log_filepath), exist_ok=True)

        file_handler = logging.FileHandler(filename=log_filepath, mode="w")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
        file_handler.addFilter(CompseqFilter())
        root_logger.addHandler(file_handler)
        logging.getLogger("compseq").info(f"Logging to file: {log_filepath}")

    _configured = True
    return log_filepath


def get_logger(name: str) -> logging.Logger:
    """Returns a logger, setting up default logging on first use."""
    with _setup_lock:
        if not _configured:
            setup_logger()
    return logging.getLogger(name)


Settings = Union[Dict[str, Any], List[Any], argparse.Namespace]


def _format_settings(settings: Settings, indent: int) -> List[str]:
    pad = "  " * indent
    if isinstance(settings, argparse.Namespace):
        settings = vars(settings)

    if isinstance(settings, dict):
        entries = list(settings.items())
    else:
        entries = [("-", item) for item in settings]
    if not entries:
        return [f"{pad}(empty)"]

    width = max(len(str(key)) for key, _ in entries)
    lines = []
    for key, value in entries:
        if isinstance(value, (dict, list, argparse.Namespace)):
            lines.append(f"{pad}{key}:")
            lines.extend(_format_settings(value, indent + 1))
        else:
            lines.append(f"{pad}{str(key).ljust(width)} = {value}")
    return lines


def display_config(config: Settings, config_name: str = "Config") -> str:
    """
    Logs a run configuration (argparse namespace, dict or list) at INFO level,
    one `key = value` line per setting, nested settings indented.

    Returns:
        str: The logged text.
    """
    text = "\n".join([config_name] + _format_settings(config, indent=1))
    get_logger("compseq.config").info(text)
    return text
