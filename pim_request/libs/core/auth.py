"""
Authentication Module

Obtains the signed-in user's identity and access token from the Azure CLI.
"""

import logging
import subprocess
from dataclasses import dataclass, field
from typing import List, Optional

from .constants import AzureCLIConstants, ErrorMessages
from .exceptions import AuthenticationError
from .utils import mask_sensitive_info

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IdentityContext:
    """Authentication context of the signed-in Azure user"""
    user_name: str
    object_id: str
    access_token: str = field(repr=False)


class AzureCliAuth:
    """Delegates authentication to the Azure CLI (az)"""

    def __init__(self, cli_path: str = AzureCLIConstants.DEFAULT_CLI_PATH,
                 token_resource: Optional[str] = None):
        """
        Initialize Azure CLI authentication handler

        Args:
            cli_path: Name or path of the az executable
            token_resource: Audience for the access token (optional, az default when not set)
        """
        self.cli_path = cli_path
        self.token_resource = token_resource

    def run_command(self, args: List[str]) -> str:
        """
        Run an az command and return its trimmed standard output.

        Args:
            args: Arguments passed to az

        Returns:
            str: Decoded and stripped standard output

        Raises:
            AuthenticationError: If the command cannot be executed, fails, or
                returns output that is not UTF-8
        """
        cmd = [self.cli_path] + list(args)
        command = ' '.join(cmd)

        logger.debug(f"Running: {command}")

        try:
            result = subprocess.run(cmd, capture_output=True, check=False)
        except FileNotFoundError as e:
            raise AuthenticationError(
                ErrorMessages.AuthError.CLI_NOT_FOUND.format(cli_path=self.cli_path)
            ) from e
        except OSError as e:
            raise AuthenticationError(
                ErrorMessages.AuthError.CLI_EXECUTION_FAILED.format(command=command, error=e)
            ) from e

        if result.returncode != 0:
            stderr = result.stderr.decode('utf-8', errors='replace').strip()
            raise AuthenticationError(ErrorMessages.AuthError.CLI_COMMAND_FAILED.format(
                command=command, returncode=result.returncode, stderr=mask_sensitive_info(stderr)
            ))

        try:
            output = result.stdout.decode('utf-8').strip()
        except UnicodeDecodeError as e:
            raise AuthenticationError(
                ErrorMessages.AuthError.CLI_INVALID_OUTPUT.format(command=command)
            ) from e

        if not output:
            raise AuthenticationError(ErrorMessages.AuthError.CLI_EMPTY_OUTPUT.format(command=command))

        return output

    def _query(self, command: AzureCLIConstants.Command, query: str, *extra_args: str) -> str:
        """Run an az sub-command with --query and tsv output"""
        args = list(command.value) + list(extra_args)
        args += ['--query', query, '-o', AzureCLIConstants.OUTPUT_FORMAT]
        return self.run_command(args)

    def get_user_name(self) -> str:
        """Get the signed-in user principal name"""
        return self._query(AzureCLIConstants.Command.ACCOUNT_SHOW, AzureCLIConstants.USER_NAME_QUERY)

    def get_user_object_id(self, user_name: str) -> str:
        """Resolve the object id of a user principal name"""
        return self._query(AzureCLIConstants.Command.AD_USER_SHOW, AzureCLIConstants.OBJECT_ID_QUERY,
                           '--id', user_name)

    def get_access_token(self) -> str:
        """Get a bearer token, scoped to token_resource when configured"""
        extra_args = ['--resource', self.token_resource] if self.token_resource else []
        return self._query(AzureCLIConstants.Command.GET_ACCESS_TOKEN,
                           AzureCLIConstants.ACCESS_TOKEN_QUERY, *extra_args)

    def get_identity(self) -> IdentityContext:
        """
        Discover the full authentication context.

        Returns:
            IdentityContext with user name, object id and access token

        Raises:
            AuthenticationError: If any az invocation fails
        """
        user_name = self.get_user_name()
        logger.info(f"Signed in to Azure as {user_name}")

        object_id = self.get_user_object_id(user_name)
        logger.debug(f"Resolved object id {object_id}")

        access_token = self.get_access_token()
        logger.debug(f"Obtained access token {mask_sensitive_info(access_token, access_token)}")

        return IdentityContext(user_name=user_name, object_id=object_id, access_token=access_token)
