"""
Constants Module

Centralized constants for the PIM Request tool to eliminate magic strings
and improve maintainability.
"""


class AzureCLIConstants:
    """Azure CLI invocation constants"""

    from enum import Enum

    DEFAULT_CLI_PATH = "az"
    OUTPUT_FORMAT = "tsv"

    # JMESPath queries passed to --query
    USER_NAME_QUERY = "user.name"
    OBJECT_ID_QUERY = "id"
    ACCESS_TOKEN_QUERY = "accessToken"

    class Command(Enum):
        """Base argument lists for the az sub-commands used by the tool"""
        ACCOUNT_SHOW = ("account", "show")
        AD_USER_SHOW = ("ad", "user", "show")
        GET_ACCESS_TOKEN = ("account", "get-access-token")


class PIMConstants:
    """PIM API constants"""

    from enum import Enum

    DEFAULT_API_URL = "https://api.azrbac.mspim.azure.com"
    ROLE_ASSIGNMENTS_PATH = "/api/v2/privilegedAccess/aadGroups/roleAssignments"

    # OData query options for the eligible role assignment lookup
    EXPAND_CLAUSE = "linkedEligibleRoleAssignment,subject,scopedResource,roleDefinition($expand=resource)"
    FILTER_TEMPLATE = "(subject/id eq '{object_id}') and (assignmentState eq '{state}')"

    class AssignmentState(str, Enum):
        """Role assignment states understood by the PIM API"""
        ELIGIBLE = "Eligible"

        def __str__(self) -> str:
            return self.value

    class ResponseKey(str, Enum):
        """Keys of the OData response envelope and role assignment entries"""
        VALUE = "value"
        COUNT = "@odata.count"
        NEXT_LINK = "@odata.nextLink"
        ID = "id"
        ROLE_DEFINITION = "roleDefinition"
        RESOURCE = "resource"
        DISPLAY_NAME = "displayName"

        def __str__(self) -> str:
            return self.value


class NetworkConstants:
    """Network-related constants"""

    from enum import IntEnum

    USER_AGENT = "pim-request/1.0.0"

    class HTTPStatus(IntEnum):
        """HTTP status codes with dedicated error messages"""
        UNAUTHORIZED = 401
        FORBIDDEN = 403


class UIConstants:
    """Interactive prompt constants"""

    SELECTION_PROMPT = "Which roles do you want to request access to?"
    SELECTION_HEADER = "You're requesting access to the following roles:"
    SELECTED_ROLE_FORMAT = "  -  {name}"
    ALL_CHOICES = ("a", "all")
    QUIT_CHOICES = ("q", "quit")
    YES_CHOICES = ("y", "yes")
    NO_CHOICES = ("n", "no")


class FileConstants:
    """Configuration file locations"""

    DEFAULT_CONFIG_FILE = "pim-request.yaml"

    # Searched in order when --config is not given
    DEFAULT_CONFIG_LOCATIONS = [
        "pim-request.yaml",
        "~/.pim-request.yaml",
        "~/.config/pim-request.yaml",
    ]


class ExitCode:
    """Process exit codes"""

    SUCCESS = 0
    FAILURE = 1
    INTERRUPTED = 130


class ErrorMessages:
    """Centralized error message templates"""

    from enum import Enum

    class AuthError(str, Enum):
        """Identity CLI error message templates"""
        CLI_NOT_FOUND = (
            "Azure CLI executable '{cli_path}' not found. Install it from "
            "https://aka.ms/installazurecli and make sure it is on your PATH."
        )
        CLI_EXECUTION_FAILED = "Failed to execute '{command}': {error}"
        CLI_COMMAND_FAILED = (
            "'{command}' exited with status {returncode}: {stderr}\n"
            "Run 'az login' if you are not signed in."
        )
        CLI_INVALID_OUTPUT = "'{command}' returned output that is not valid UTF-8"
        CLI_EMPTY_OUTPUT = "'{command}' returned no output"

        def __str__(self) -> str:
            return self.value

    class NetworkError(str, Enum):
        """PIM API error message templates"""
        UNAUTHORIZED = (
            "Unauthorized (401). The access token was rejected by the PIM API. "
            "Run 'az login' again or configure PIM_TOKEN_RESOURCE for the PIM API audience."
        )
        FORBIDDEN = (
            "Forbidden (403). Your account is signed in but is not allowed to "
            "read PIM role assignments."
        )
        HTTP_ERROR = "PIM API returned HTTP {status}: {reason}"
        CONNECTION_FAILED = "Could not connect to the PIM API at {url}: {error}"
        TIMEOUT = "Request to the PIM API timed out after {timeout} seconds"
        SSL_FAILED = (
            "SSL certificate verification failed for the PIM API. If you are behind a "
            "TLS-intercepting proxy, use --insecure.\nOriginal error: {error}"
        )
        REQUEST_FAILED = "Request to the PIM API failed: {error}"

        def __str__(self) -> str:
            return self.value

    class ParseError(str, Enum):
        """Response parsing error message templates"""
        INVALID_JSON = "PIM API response is not valid JSON: {error}"
        NOT_AN_OBJECT = "PIM API response must be a JSON object, got {type_name}"
        MISSING_FIELD = "Role assignment #{index} is missing required field '{field}'"

        def __str__(self) -> str:
            return self.value

    class SelectionError(str, Enum):
        """Interactive prompt error message templates"""
        NOT_INTERACTIVE = (
            "Role selection requires an interactive terminal. "
            "Run the command directly in your terminal (without pipes or redirects)."
        )
        CANCELLED = "Operation was canceled by the user"
        INTERRUPTED = "Operation was interrupted by the user"

        def __str__(self) -> str:
            return self.value

    class ConfigError(str, Enum):
        """Configuration error message templates"""
        INVALID_YAML = "Invalid YAML in configuration file {config_path}: {error}"
        FILE_NOT_FOUND = "Configuration file not found: {config_path}"
        INVALID_TYPE = "{path} must be a {type_name}"
        INVALID_BOOLEAN = "Invalid boolean value '{value}'. Use true or false."
        INVALID_TIMEOUT = "Invalid timeout '{value}'. Use a positive number of seconds."

        def __str__(self) -> str:
            return self.value


class AppConstants:
    """Application identity"""

    NAME = "pim-request"
    VERSION = "1.0.0"
