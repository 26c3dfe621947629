"""
Security configuration and utilities for accesslog.

Centralizes input limits and output sanitizing so that every entry point
(library, use case, CLI) enforces them the same way.
"""

import warnings
from pathlib import Path

from accesslog.core.exceptions import AccessLogError

__all__ = [
    # Configuration constants
    "MAX_LINE_LENGTH",
    "CSV_FORMULA_PREFIXES",
    # Exceptions
    "LineTooLongError",
    "SecurityValidationError",
    # Validators
    "validate_line_length",
    "sanitize_csv_cell",
    "check_symlink",
]


# =============================================================================
# Security Configuration Constants
# =============================================================================

# Maximum accepted line length in bytes (10MB)
MAX_LINE_LENGTH = 10 * 1024 * 1024

# Characters that trigger formula execution in spreadsheets
CSV_FORMULA_PREFIXES = ("=", "+", "-", "@", "\t", "\r")


# =============================================================================
# Security Exceptions
# =============================================================================

class SecurityValidationError(AccessLogError):
    """Raised when security validation fails."""

    def __init__(self, message: str, validation_type: str, details: dict | None = None):
        super().__init__(message, details)
        self.validation_type = validation_type


class LineTooLongError(SecurityValidationError):
    """Raised when a log line exceeds MAX_LINE_LENGTH."""

    def __init__(self, line_length: int, max_length: int = MAX_LINE_LENGTH):
        message = (
            f"Line length ({line_length:,} bytes) exceeds maximum allowed "
            f"({max_length:,} bytes)"
        )
        super().__init__(
            message,
            validation_type="line_length",
            details={
                "line_length": line_length,
                "max_length": max_length,
            }
        )
        self.line_length = line_length
        self.max_length = max_length


# =============================================================================
# Validation Functions
# =============================================================================

def validate_line_length(line: str, max_length: int = MAX_LINE_LENGTH) -> str:
    """
    Validate that a line does not exceed the maximum allowed length.

    Args:
        line: The line to validate
        max_length: Maximum allowed length in bytes

    Returns:
        The original line if valid

    Raises:
        LineTooLongError: If line exceeds max_length
    """
    # UTF-8 needs at most four bytes per character
    if len(line) * 4 <= max_length:
        return line
    line_length = len(line.encode("utf-8", errors="replace"))
    if line_length > max_length:
        raise LineTooLongError(line_length, max_length)
    return line


def sanitize_csv_cell(value: str) -> str:
    """
    Sanitize a cell value for CSV output to prevent formula injection.

    Access logs are attacker-controlled: request lines, referrers and user
    agents routinely start with characters a spreadsheet would evaluate.

    Args:
        value: The cell value to sanitize

    Returns:
        Sanitized value safe for CSV output
    """
    # A lone dash is the CLF placeholder, not a formula
    if value and value != "-" and value[0] in CSV_FORMULA_PREFIXES:
        return "'" + value
    return value


def check_symlink(path: Path | str, warn: bool = True) -> tuple[bool, Path]:
    """
    Check if a path is a symlink and optionally warn.

    Args:
        path: Path to check
        warn: If True, emit a warning when symlink is detected

    Returns:
        Tuple of (is_symlink, resolved_path)
    """
    path = Path(path)
    is_symlink = path.is_symlink()

    if is_symlink and warn:
        resolved = path.resolve()
        warnings.warn(
            f"Following symlink: {path} -> {resolved}",
            UserWarning,
            stacklevel=2,
        )

    return is_symlink, path.resolve()
