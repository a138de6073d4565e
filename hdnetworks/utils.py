"""Utility functions for hdnetworks."""

import logging
import sys
from urllib.parse import urlsplit, urlunsplit

import structlog

# ANSI color codes
RESET = "\033[0m"
BOLD = "\033[1m"
RED = "\033[31m"
YELLOW = "\033[33m"
GREEN = "\033[32m"
BLUE = "\033[34m"
CYAN = "\033[36m"

REDACTED = "***"

# Path segments at least this long are treated as access keys
_MIN_KEY_SEGMENT = 16


def section_header(title: str) -> None:
    """Print a section header."""
    print()
    print(f"--- {title} ---")


def error(message: str) -> None:
    """Print an error message in red."""
    print(f"{RED}[error]{RESET} {message}")


def warn(message: str) -> None:
    """Print a warning message in yellow."""
    print(f"{YELLOW}[warn]{RESET} {message}")


def info(message: str) -> None:
    """Print an info message in blue."""
    print(f"{BLUE}[info]{RESET} {message}")


def success(message: str) -> None:
    """Print a success message in green."""
    print(f"{GREEN}[success]{RESET} {message}")


def result(message: str) -> None:
    """Print a result message in cyan."""
    print(f"{CYAN}[result]{RESET} {message}")


def bold(message: str) -> str:
    """Return a bold formatted message."""
    return f"{BOLD}{message}{RESET}"


def bold_cyan(message: str) -> str:
    """Return a bold cyan formatted message."""
    return f"{BOLD}{CYAN}{message}{RESET}"


def redact_endpoint(url: str) -> str:
    """
    Mask the secret parts of an endpoint URL.

    Credentials, long path segments (e.g. the Infura project id in
    ``/v3/<key>``) and the query string are replaced with ``***``.

    Args:
        url: Endpoint URL, possibly malformed

    Returns:
        URL safe to print or log
    """
    try:
        parts = urlsplit(url)
        host = parts.hostname or ""
        port = parts.port
    except ValueError:
        return REDACTED

    if ":" in host:
        host = f"[{host}]"
    netloc = f"{host}:{port}" if port else host
    if parts.username or parts.password:
        netloc = f"{REDACTED}@{netloc}"

    segments = [
        REDACTED if len(segment) >= _MIN_KEY_SEGMENT else segment
        for segment in parts.path.split("/")
    ]
    query = REDACTED if parts.query else ""

    return urlunsplit((parts.scheme, netloc, "/".join(segments), query, ""))


def describe_mnemonic(mnemonic: str) -> str:
    """Return a non-secret description of a mnemonic phrase."""
    words = mnemonic.split()
    if not words:
        return "not set"
    return f"{len(words)} words (hidden)"


def configure_logging(verbose: bool = False) -> None:
    """Route structlog events to stderr, debug events only when verbose."""
    level = logging.DEBUG if verbose else logging.WARNING
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )
