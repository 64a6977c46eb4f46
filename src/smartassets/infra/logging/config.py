from __future__ import annotations

"""
Logging Configuration for the smartassets CLI.

The console stream is stderr, so stdout stays reserved for the run
summary and for --json / --dump-config payloads. Console lines carry the
program name like other command line tools; the optional log file keeps
timestamps and logger names for post-mortem reading.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

PROGRAM_NAME = "smartassets"

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings used to initialize logging for one CLI invocation.

    Attributes:
        level: Minimum severity level to capture.
        console: Emit records on stderr.
        log_file: Optional rotating log file.
        max_bytes: Size of a log file segment before rotation.
        backup_count: Rotated segments to keep next to the log file.
        console_fmt: Format of stderr lines.
        file_fmt: Format of log file lines.
        datefmt: Timestamp format of log file lines.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 512 * 1024
    backup_count: int = 3

    console_fmt: str = f"{PROGRAM_NAME}: %(levelname)s: %(message)s"
    file_fmt: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    datefmt: str = "%Y-%m-%dT%H:%M:%S"

    @classmethod
    def for_cli(
            cls,
            *,
            debug: bool = False,
            quiet: bool = False,
            log_file: Optional[str] = None,
    ) -> "LoggingConfig":
        """
        Build the configuration matching the CLI verbosity flags.

        --debug wins over --quiet. In quiet mode only warnings and errors
        reach stderr; the log file, when requested, still follows the same
        level.
        """
        if debug:
            level = "DEBUG"
        elif quiet:
            level = "WARNING"
        else:
            level = "INFO"
        return cls(level=level, console=True, log_file=log_file)
