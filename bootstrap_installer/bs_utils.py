# bootstrap_installer/bs_utils.py
# -*- coding: utf-8 -*-
import logging
import shutil
from typing import Iterable, List


def get_bs_logger(name: str) -> logging.Logger:
    """Returns the logger used by a bootstrap (environment probing) module."""
    return logging.getLogger(f"bootstrap.{name}")


def bootstrap_cmd_exists(cmd_name: str) -> bool:
    """Minimalistic check if a command exists in PATH."""
    return shutil.which(cmd_name) is not None


def missing_commands(cmd_names: Iterable[str]) -> List[str]:
    """The commands among `cmd_names` that are not on PATH, in order."""
    return [name for name in cmd_names if not bootstrap_cmd_exists(name)]
