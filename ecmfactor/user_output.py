"""
User Output Abstraction

Separates what the command line prints for the user from log records,
so results can be printed while diagnostics go to the log file.
"""

import logging
import sys
from typing import Optional, Sequence, TextIO, Tuple

from .factor_list import UnresolvedResidue


def format_factors(factors: Sequence[Tuple[int, int]]) -> str:
    """
    Render a factor list as a product, unresolved composites in brackets.

    Example:
        >>> format_factors([(-1, 1), (2, 2), (3, 1)])
        '-1 * 2^2 * 3'
    """
    if not factors:
        return "1"
    parts = []
    for entry in factors:
        value, exp = entry
        text = f"[{value}]" if isinstance(entry, UnresolvedResidue) else str(value)
        parts.append(f"{text}^{exp}" if exp > 1 else text)
    return " * ".join(parts)


class UserOutput:
    """
    Unified handler for user-facing output.

    Usage:
        output = UserOutput()
        output.result(600851475143, factors)
        output.warning("1 composite factor left unresolved")
    """

    def __init__(
        self,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        quiet: bool = False,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize output handler.

        Args:
            stdout: Output stream for normal messages (default: sys.stdout)
            stderr: Output stream for errors (default: sys.stderr)
            quiet: If True, print bare results and no warnings
            logger: Optional logger for messages that should also be logged
        """
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr
        self.quiet = quiet
        self.logger = logger or logging.getLogger(__name__)

    def info(self, message: str, log: bool = False) -> None:
        """Print an informational line to stdout unless quiet."""
        if not self.quiet:
            print(message, file=self.stdout)
        if log:
            self.logger.info(message)

    def warning(self, message: str, log: bool = True) -> None:
        """
        Print warning message to user.

        Args:
            message: Warning message to display
            log: If True, also log to warning logger
        """
        if not self.quiet:
            print(f"Warning: {message}", file=self.stderr)
        if log:
            self.logger.warning(message)

    def error(self, message: str, log: bool = True) -> None:
        """
        Print error message to user (always shown, even in quiet mode).
        """
        print(f"Error: {message}", file=self.stderr)
        if log:
            self.logger.error(message)

    def result(self, n: int, factors: Sequence[Tuple[int, int]]) -> None:
        """Print one factorisation; quiet mode leaves out the 'n = ' prefix."""
        if self.quiet:
            print(format_factors(factors), file=self.stdout)
        else:
            print(f"{n} = {format_factors(factors)}", file=self.stdout)
