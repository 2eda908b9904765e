#!/usr/bin/env python3

"""
Logging utilities for the annotation workspace provisioner.

Every stage reports through these helpers: plain messages on stdout,
warnings and errors echoed to stderr, and external commands shown the way
they would be typed in a shell.
"""

import sys
import shlex
import logging

logger = logging.getLogger(__name__)


def setup_logging(quiet=False):
    """
    Configure logging for a provisioning run.

    Args:
        quiet (bool): If True, only show warnings and errors
    """
    level = logging.WARNING if quiet else logging.INFO

    # replaces handlers left by an earlier call in the same process
    logging.basicConfig(
        level=level,
        format='%(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ],
        force=True,
    )

    logger.setLevel(level)


def log_info(message):
    """Log informational message (suppressed in quiet mode)."""
    logger.info(message)


def log_command(command, cwd=None):
    """
    Log an external command as a copy-pasteable shell line.

    Args:
        command (list): Command and arguments
        cwd (str): Directory the command runs in, shown as a ``cd`` prefix
    """
    line = shlex.join(str(part) for part in command)
    if cwd is not None:
        line = f"(cd {shlex.quote(str(cwd))} && {line})"
    logger.info(f"$ {line}")
    return line


def log_warning(message):
    """Log warning message to both logger and stderr (always shown)."""
    logger.warning(message)
    print(f"Warning: {message}", file=sys.stderr)


def log_error(message):
    """Log error message to both logger and stderr (always shown)."""
    logger.error(message)
    print(f"Error: {message}", file=sys.stderr)
