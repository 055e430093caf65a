"""
Main Application

Orchestrates the identity, PIM and selection libraries into the role request workflow.
"""

import argparse
import logging
import sys
from typing import List, Optional

# Core libraries
from .core import AzureCliAuth, ConfigManager, RuntimeSettings, setup_logging
from .core.config import generate_sample_config_file
from .core.constants import ExitCode
from .core.exceptions import ConfigurationError, PIMRequestError, SelectionError

# PIM libraries
from .pim import PIMClient, Role

from .cli_interface import CLIInterface
from .selection_ui import RoleSelectionUI

logger = logging.getLogger(__name__)


class PIMRequestManager:
    """Main application orchestrator for the PIM Request tool"""

    def __init__(
        self,
        auth_provider: Optional[AzureCliAuth] = None,
        pim_client: Optional[PIMClient] = None,
        selection_ui: Optional[RoleSelectionUI] = None,
        settings: Optional[RuntimeSettings] = None
    ):
        """
        Initialize PIM Request manager with dependency injection

        Args:
            auth_provider: Identity provider (defaults to AzureCliAuth)
            pim_client: PIM API client (defaults to PIMClient)
            selection_ui: Interactive selector (defaults to RoleSelectionUI)
            settings: Runtime settings used to build the defaults
        """
        self.settings = settings or RuntimeSettings()

        self.auth = auth_provider or AzureCliAuth(
            cli_path=self.settings.cli_path,
            token_resource=self.settings.token_resource
        )
        self.pim_client = pim_client or PIMClient(
            api_url=self.settings.api_url,
            skip_tls=self.settings.insecure,
            timeout=self.settings.timeout
        )
        self.selection_ui = selection_ui or RoleSelectionUI()

    def get_user_eligible_roles(self) -> List[Role]:
        """
        Discover the signed-in user and fetch their eligible roles

        Returns:
            List of eligible roles

        Raises:
            AuthenticationError: If the Azure CLI cannot provide the identity
            NetworkError: If the PIM API request fails
            RoleParsingError: If the PIM API response is malformed
        """
        identity = self.auth.get_identity()
        return self.pim_client.fetch_eligible_roles(identity.object_id, identity.access_token)

    def run(self) -> int:
        """
        Run the role selection workflow

        Returns:
            int: Exit code (0 for success and prompt cancellation, 1 for error)
        """
        try:
            eligible_roles = self.get_user_eligible_roles()
        except PIMRequestError as e:
            logger.error(f"Failed to get eligible roles: {e}")
            print(f"Error: {e}", file=sys.stderr)
            return ExitCode.FAILURE

        if not eligible_roles:
            print("No eligible PIM roles found for your account.", file=sys.stderr)
            return ExitCode.SUCCESS

        try:
            selected_roles = self.selection_ui.select_roles(eligible_roles)
        except SelectionError as e:
            # Prompt problems are reported but do not fail the run
            print(f"Error: {e}", file=sys.stderr)
            return ExitCode.SUCCESS

        self.selection_ui.print_selection(selected_roles)
        return ExitCode.SUCCESS


def create_pim_request_manager(settings: Optional[RuntimeSettings] = None) -> PIMRequestManager:
    """
    Factory function to create PIMRequestManager with default dependencies

    Args:
        settings: Runtime settings (defaults to built-in defaults)

    Returns:
        PIMRequestManager: Configured instance
    """
    return PIMRequestManager(settings=settings)


def _log_request_options(args: argparse.Namespace) -> None:
    """Log request flags. They are accepted but not used by the selection flow yet."""
    if args.pim_roles is not None:
        logger.info(f"Value for pim_roles: {args.pim_roles!r}")
    if args.reason is not None:
        logger.debug(f"Value for reason: {args.reason!r}")
    if args.yes_to_all is not None:
        logger.debug(f"Value for yes_to_all: {args.yes_to_all}")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Application entry point.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    args = CLIInterface().parse_args(argv)
    setup_logging(args.verbose)

    try:
        if args.generate_config:
            config_path = generate_sample_config_file(args.generate_config)
            print(f"Sample configuration file created: {config_path}")
            return ExitCode.SUCCESS

        config_manager = ConfigManager(custom_config_path=args.config)
        config_manager.load_config()
        settings = config_manager.resolve_settings(verbose=args.verbose, insecure=args.insecure)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return ExitCode.FAILURE

    if settings.verbose and not args.verbose:
        setup_logging(True)

    _log_request_options(args)

    try:
        return create_pim_request_manager(settings).run()
    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return ExitCode.INTERRUPTED
