#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Core utility functions for the project.

This module provides the logging setup used by the installer entry point:
a symbol-per-level formatter, optional ANSI colours on terminals and an
optional prefix for every line.
"""

import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from installer.config_models import SYMBOLS_DEFAULT

SIMPLE_LOG_FORMAT_WITH_PREFIX_PLACEHOLDER = "{log_prefix}%(symbol)s%(message)s"
SIMPLE_LOG_FORMAT_NO_PREFIX = "%(symbol)s%(message)s"

LEVEL_COLOURS: Dict[int, str] = {
    logging.DEBUG: "\033[2m",
    logging.INFO: "\033[34m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1;31m",
}
COLOUR_RESET = "\033[0m"


class SymbolFormatter(logging.Formatter):
    """
    A custom formatter that adds symbols to log messages based on the log level,
    optionally wrapping the symbol in an ANSI colour.

    %(symbol)s carries its own trailing space. It is empty when the message
    already starts with one of the symbols, so a line never shows two.
    """

    def __init__(
        self,
        fmt=None,
        datefmt=None,
        style="%",
        validate=True,
        symbols=None,
        use_colour=False,
    ):
        super().__init__(fmt, datefmt, style, validate)
        self.symbols = symbols or SYMBOLS_DEFAULT
        self.use_colour = use_colour

    def format(self, record):
        message = record.getMessage()
        if any(s and message.startswith(s) for s in self.symbols.values()):
            record.symbol = ""
            return super().format(record)

        if record.levelno == logging.DEBUG:
            symbol = self.symbols.get("debug", "🐛")
        elif record.levelno == logging.INFO:
            symbol = self.symbols.get("info", "ℹ️")
        elif record.levelno == logging.WARNING:
            symbol = self.symbols.get("warning", "⚠️")
        elif record.levelno == logging.ERROR:
            symbol = self.symbols.get("error", "❌")
        elif record.levelno == logging.CRITICAL:
            symbol = self.symbols.get("critical", "🔥")
        else:
            symbol = ""

        if self.use_colour and symbol:
            colour = LEVEL_COLOURS.get(record.levelno, "")
            symbol = f"{colour}{symbol}{COLOUR_RESET}"
        record.symbol = f"{symbol} " if symbol else ""

        return super().format(record)


def setup_logging(
    log_level: int = logging.INFO,
    log_file: Optional[str] = None,
    log_to_console: bool = True,
    log_format_str: Optional[str] = None,
    log_prefix: Optional[str] = None,
    symbols: Optional[Dict[str, str]] = None,
) -> None:
    """
    Configures logging for the application.

    Logs go to stdout and/or a file. The console handler colours the level
    symbol when stdout is a terminal; the file handler never does.

    Parameters:
    log_level: int
        The logging level to configure. Defaults to logging.INFO.
    log_file: Optional[str]
        The file path for the log file. If specified, logs will also be written to this file.
    log_to_console: bool
        Whether to log to the console (stdout). Defaults to True.
    log_format_str: Optional[str]
        A custom log format string. '{log_prefix}' is substituted if present.
    log_prefix: Optional[str]
        An optional string to prefix log messages with.
    symbols: Optional[Dict[str, str]]
        Level symbols; defaults to SYMBOLS_DEFAULT.

    Returns:
    None
    """
    actual_prefix = (
        (log_prefix.strip() + " ")
        if log_prefix and log_prefix.strip()
        else ""
    )

    final_format_str: str
    if log_format_str:
        if "{log_prefix}" in log_format_str:
            final_format_str = log_format_str.format(log_prefix=actual_prefix)
        else:
            final_format_str = actual_prefix + log_format_str
    elif actual_prefix:
        final_format_str = SIMPLE_LOG_FORMAT_WITH_PREFIX_PLACEHOLDER.format(
            log_prefix=actual_prefix
        )
    else:
        final_format_str = SIMPLE_LOG_FORMAT_NO_PREFIX

    handlers: List[logging.Handler] = []
    if log_file:
        try:
            log_file_path = Path(log_file)
            log_file_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file_path, mode="a")
            file_handler.setFormatter(
                SymbolFormatter(
                    fmt=final_format_str,
                    datefmt="%Y-%m-%d %H:%M:%S",
                    symbols=symbols,
                )
            )
            handlers.append(file_handler)
        except OSError as e:
            print(
                f"Warning: Could not create file handler for log file {log_file}: {e}",
                file=sys.stderr,
            )

    if log_to_console or not handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(
            SymbolFormatter(
                fmt=final_format_str,
                datefmt="%Y-%m-%d %H:%M:%S",
                symbols=symbols,
                use_colour=sys.stdout.isatty(),
            )
        )
        handlers.append(console_handler)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    for handler in handlers:
        root_logger.addHandler(handler)

    logging.getLogger(__name__).debug(
        f"Logging configured. Level: {logging.getLevelName(log_level)}. Format: '{final_format_str}'"
    )
