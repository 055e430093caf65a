"""
Core Utilities

Common utility functions used across the PIM Request tool.
"""

import logging
import math
import re
import sys
from typing import Optional, Type

import requests
import urllib3

from .constants import ErrorMessages, NetworkConstants
from .exceptions import ConfigurationError, NetworkError, PIMRequestError

TRUE_VALUES = ('true', 'yes', 'y', '1', 'on')
FALSE_VALUES = ('false', 'no', 'n', '0', 'off')

MASK = "***MASKED***"


def setup_logging(verbose: bool = False) -> None:
    """
    Set up logging configuration for the application.

    Args:
        verbose: Enable debug logging level
    """
    level = logging.DEBUG if verbose else logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    root_logger.addHandler(console_handler)

    # Reduce noise from urllib3 when using insecure connections
    logging.getLogger('urllib3').setLevel(logging.WARNING)

    if verbose:
        logging.getLogger(__name__).debug("Debug mode enabled")


def disable_ssl_warnings() -> None:
    """Disable SSL warnings when --insecure is used"""
    urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)


def is_interactive_terminal() -> bool:
    """
    Check if standard input is connected to a terminal.

    Returns:
        bool: True if the user can answer prompts
    """
    return sys.stdin is not None and sys.stdin.isatty()


def mask_sensitive_info(text: str, token: Optional[str] = None) -> str:
    """
    Mask sensitive information in text for logging and debug output.

    Args:
        text: Text to mask
        token: Token to mask (optional)

    Returns:
        Text with sensitive information masked
    """
    if not text:
        return text

    masked_text = text

    if token and token in masked_text:
        masked_text = masked_text.replace(token, MASK)

    # Bearer headers
    masked_text = re.sub(r'Bearer [A-Za-z0-9+/=_.-]+', f'Bearer {MASK}', masked_text)

    # Bare JWTs (header.payload.signature)
    masked_text = re.sub(r'eyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]*', MASK, masked_text)

    return masked_text


def parse_bool(value) -> bool:
    """
    Parse a boolean from a CLI or configuration value.

    Args:
        value: bool or string such as "true", "false", "yes", "no", "1", "0"

    Returns:
        bool: Parsed value

    Raises:
        ConfigurationError: If the value is not a recognised boolean
    """
    if isinstance(value, bool):
        return value

    normalized = str(value).strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False

    raise ConfigurationError(ErrorMessages.ConfigError.INVALID_BOOLEAN.format(value=value))


def parse_timeout(value) -> Optional[float]:
    """
    Parse a request timeout in seconds. Empty values mean no timeout.

    Raises:
        ConfigurationError: If the value is not a positive, finite number
    """
    if value is None or value == "":
        return None

    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(ErrorMessages.ConfigError.INVALID_TIMEOUT.format(value=value))

    if not math.isfinite(timeout) or timeout <= 0:
        raise ConfigurationError(ErrorMessages.ConfigError.INVALID_TIMEOUT.format(value=value))

    return timeout


def handle_http_error(error: Exception, url: str = "", timeout: Optional[float] = None,
                      exception_class: Type[PIMRequestError] = NetworkError) -> None:
    """
    Centralized error handling for requests exceptions

    Args:
        error: The caught exception
        url: Request URL, used for connection error messages
        timeout: Configured timeout, used for timeout error messages
        exception_class: The specific exception class to raise

    Raises:
        PIMRequestError: Appropriate error type with user-friendly message
    """
    if isinstance(error, requests.exceptions.HTTPError) and error.response is not None:
        status = error.response.status_code
        if status == NetworkConstants.HTTPStatus.UNAUTHORIZED:
            raise exception_class(ErrorMessages.NetworkError.UNAUTHORIZED.value) from error
        if status == NetworkConstants.HTTPStatus.FORBIDDEN:
            raise exception_class(ErrorMessages.NetworkError.FORBIDDEN.value) from error
        raise exception_class(ErrorMessages.NetworkError.HTTP_ERROR.format(
            status=status, reason=error.response.reason
        )) from error

    if isinstance(error, requests.exceptions.SSLError):
        raise exception_class(ErrorMessages.NetworkError.SSL_FAILED.format(error=error)) from error

    if isinstance(error, requests.exceptions.Timeout):
        raise exception_class(ErrorMessages.NetworkError.TIMEOUT.format(timeout=timeout)) from error

    if isinstance(error, requests.exceptions.ConnectionError):
        # Strip the query string, it carries the user's object id
        raise exception_class(ErrorMessages.NetworkError.CONNECTION_FAILED.format(
            url=url.split('?', 1)[0], error=error
        )) from error

    raise exception_class(ErrorMessages.NetworkError.REQUEST_FAILED.format(error=error)) from error
