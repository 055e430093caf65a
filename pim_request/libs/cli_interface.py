"""
CLI Interface Module.

This module contains the command-line interface for the PIM Request tool.
It handles argument parsing and validation of flag values.
"""

import argparse
import logging
from typing import List, Optional

from .core.constants import AppConstants
from .core.exceptions import ConfigurationError
from .core.utils import parse_bool

# Set up logger
logger = logging.getLogger(__name__)


def bool_argument(value: str) -> bool:
    """argparse type for explicit true/false flag values"""
    try:
        return parse_bool(value)
    except ConfigurationError as e:
        raise argparse.ArgumentTypeError(str(e))


class CLIInterface:
    """Handles command-line interface setup and argument parsing."""

    def __init__(self):
        """Initialize CLI interface."""
        self.parser: Optional[argparse.ArgumentParser] = None

    def create_argument_parser(self) -> argparse.ArgumentParser:
        """
        Create and configure the main argument parser.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog=AppConstants.NAME,
            description='List the Azure AD PIM roles you are eligible for and choose which ones to request.',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=self._get_help_epilog()
        )

        self._add_request_arguments(parser)
        self._add_common_arguments(parser)
        self._add_configuration_arguments(parser)

        self.parser = parser
        return parser

    def _add_request_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Add role request arguments."""
        parser.add_argument('-p', '--pim-roles', metavar='ROLES',
                            help='Comma separated list of PIM role names')
        parser.add_argument('-r', '--reason', metavar='REASON',
                            help='Provide a reason for the request.')
        parser.add_argument('-y', '--yes-to-all', metavar='{true,false}', type=bool_argument,
                            help='Suppress any yes/no prompts.')

    def _add_common_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Add logging, network and version arguments."""
        parser.add_argument('-v', '--verbose', action='store_true',
                            help='Enable verbose logging')
        parser.add_argument('--insecure', action='store_true',
                            help='Skip TLS certificate verification for the PIM API')
        parser.add_argument('-V', '--version', action='version',
                            version=f'%(prog)s {AppConstants.VERSION}')

    def _add_configuration_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Add configuration-related arguments."""
        parser.add_argument('--config', metavar='FILE',
                            help='Path to configuration file (default: search standard locations)')
        parser.add_argument('--generate-config', metavar='FILE',
                            help='Generate sample configuration file at specified path and exit')

    def _get_help_epilog(self) -> str:
        """Return the help epilog text."""
        return """
Examples:
  # Pick roles interactively
  %(prog)s

  # Verbose logging, custom configuration file
  %(prog)s --verbose --config ~/work/pim-request.yaml

Prerequisites:
  The Azure CLI must be installed and signed in ('az login').

Configuration File:
  Default locations (in order): ./pim-request.yaml, ~/.pim-request.yaml, ~/.config/pim-request.yaml
  Environment overrides: AZ_CLI_PATH, PIM_TOKEN_RESOURCE, PIM_API_URL, PIM_REQUEST_TIMEOUT

  Generate a sample config: %(prog)s --generate-config ~/.pim-request.yaml
        """

    def parse_args(self, argv: Optional[List[str]] = None) -> argparse.Namespace:
        """
        Parse command line arguments.

        Args:
            argv: Argument list (defaults to sys.argv[1:])

        Returns:
            Parsed arguments; --pim-roles is kept as the literal string
        """
        parser = self.parser or self.create_argument_parser()
        return parser.parse_args(argv)
