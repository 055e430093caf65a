"""
Tests for Azure CLI authentication
"""

import subprocess
import pytest
from unittest.mock import Mock, patch, call

from pim_request.libs.core.auth import AzureCliAuth, IdentityContext
from pim_request.libs.core.constants import AzureCLIConstants
from pim_request.libs.core.exceptions import AuthenticationError

from test_constants import CommonTestConstants


def completed(stdout: bytes = b"", returncode: int = 0, stderr: bytes = b"") -> Mock:
    """Mock subprocess.CompletedProcess"""
    result = Mock(spec=subprocess.CompletedProcess)
    result.stdout = stdout
    result.stderr = stderr
    result.returncode = returncode
    return result


EXPECTED_CALLS = [
    ['az', 'account', 'show', '--query', 'user.name', '-o', 'tsv'],
    ['az', 'ad', 'user', 'show', '--id', CommonTestConstants.USER_NAME, '--query', 'id', '-o', 'tsv'],
    ['az', 'account', 'get-access-token', '--query', 'accessToken', '-o', 'tsv'],
]


class TestAzureCliAuth:
    """Test Azure CLI identity discovery"""

    @patch('pim_request.libs.core.auth.subprocess.run')
    def test_get_identity_runs_three_commands_in_order(self, mock_run):
        """user name, then object id, then access token"""
        # Arrange
        mock_run.side_effect = [
            completed(f"{CommonTestConstants.USER_NAME}\n".encode()),
            completed(f"{CommonTestConstants.OBJECT_ID}\n".encode()),
            completed(f"{CommonTestConstants.ACCESS_TOKEN}\n".encode()),
        ]

        # Act
        identity = AzureCliAuth().get_identity()

        # Assert
        assert identity == IdentityContext(
            user_name=CommonTestConstants.USER_NAME,
            object_id=CommonTestConstants.OBJECT_ID,
            access_token=CommonTestConstants.ACCESS_TOKEN,
        )
        assert mock_run.call_args_list == [
            call(cmd, capture_output=True, check=False) for cmd in EXPECTED_CALLS
        ]

    @patch('pim_request.libs.core.auth.subprocess.run')
    def test_output_is_trimmed(self, mock_run):
        mock_run.return_value = completed(b"  alice@contoso.com \r\n")

        assert AzureCliAuth().get_user_name() == "alice@contoso.com"

    @patch('pim_request.libs.core.auth.subprocess.run')
    def test_custom_cli_path_and_token_resource(self, mock_run):
        mock_run.return_value = completed(b"token\n")

        auth = AzureCliAuth(cli_path="/opt/az/bin/az", token_resource="https://api.azrbac.mspim.azure.com")
        auth.get_access_token()

        mock_run.assert_called_once_with(
            ['/opt/az/bin/az', 'account', 'get-access-token', '--resource',
             'https://api.azrbac.mspim.azure.com', '--query', 'accessToken', '-o', 'tsv'],
            capture_output=True, check=False
        )

    @patch('pim_request.libs.core.auth.subprocess.run')
    def test_missing_executable(self, mock_run):
        mock_run.side_effect = FileNotFoundError("az")

        with pytest.raises(AuthenticationError) as exc_info:
            AzureCliAuth().get_user_name()

        assert "Azure CLI executable 'az' not found" in str(exc_info.value)

    @patch('pim_request.libs.core.auth.subprocess.run')
    def test_os_error(self, mock_run):
        mock_run.side_effect = PermissionError("Permission denied")

        with pytest.raises(AuthenticationError) as exc_info:
            AzureCliAuth().get_user_name()

        assert "Failed to execute 'az account show" in str(exc_info.value)

    @patch('pim_request.libs.core.auth.subprocess.run')
    def test_non_zero_exit_is_fatal(self, mock_run):
        # Arrange
        mock_run.return_value = completed(
            b"", returncode=1, stderr=b"ERROR: Please run 'az login' to setup account."
        )

        # Act & Assert
        with pytest.raises(AuthenticationError) as exc_info:
            AzureCliAuth().get_identity()

        message = str(exc_info.value)
        assert "exited with status 1" in message
        assert "Please run 'az login'" in message
        assert mock_run.call_count == 1

    @patch('pim_request.libs.core.auth.subprocess.run')
    def test_stderr_token_is_masked(self, mock_run):
        mock_run.return_value = completed(
            b"", returncode=2, stderr=f"failed with {CommonTestConstants.ACCESS_TOKEN}".encode()
        )

        with pytest.raises(AuthenticationError) as exc_info:
            AzureCliAuth().get_access_token()

        assert CommonTestConstants.ACCESS_TOKEN not in str(exc_info.value)
        assert CommonTestConstants.MASKED_TOKEN in str(exc_info.value)

    @patch('pim_request.libs.core.auth.subprocess.run')
    def test_non_utf8_output_fails(self, mock_run):
        mock_run.return_value = completed(b"\xff\xfe\xfa")

        with pytest.raises(AuthenticationError) as exc_info:
            AzureCliAuth().get_user_name()

        assert "not valid UTF-8" in str(exc_info.value)

    @patch('pim_request.libs.core.auth.subprocess.run')
    def test_empty_output_fails(self, mock_run):
        mock_run.return_value = completed(b"\n")

        with pytest.raises(AuthenticationError) as exc_info:
            AzureCliAuth().get_user_name()

        assert "returned no output" in str(exc_info.value)

    @patch('pim_request.libs.core.auth.subprocess.run')
    def test_failure_stops_later_commands(self, mock_run):
        mock_run.side_effect = [
            completed(b"alice@contoso.com\n"),
            completed(b"", returncode=3, stderr=b"ERROR: Resource 'alice@contoso.com' does not exist."),
        ]

        with pytest.raises(AuthenticationError):
            AzureCliAuth().get_identity()

        assert mock_run.call_count == 2


class TestIdentityContext:
    """Test the identity value object"""

    def test_identity_is_immutable(self):
        identity = IdentityContext("alice@contoso.com", "abc-123", "secret-token")

        with pytest.raises(Exception):
            identity.access_token = "other-token"

    def test_token_not_in_repr(self):
        identity = IdentityContext("alice@contoso.com", "abc-123", "secret-token")

        assert "secret-token" not in repr(identity)


class TestAzureCliCommands:
    """Test the az sub-command argument lists"""

    def test_command_values(self):
        assert AzureCLIConstants.Command.ACCOUNT_SHOW.value == ("account", "show")
        assert AzureCLIConstants.Command.AD_USER_SHOW.value == ("ad", "user", "show")
        assert AzureCLIConstants.Command.GET_ACCESS_TOKEN.value == ("account", "get-access-token")
