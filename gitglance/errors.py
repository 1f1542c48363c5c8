"""Error handling framework for gitglance."""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Any, Optional


class ErrorCategory(Enum):
    """Categories of errors for structured error handling."""
    ENVIRONMENT = "environment"
    NOT_A_REPOSITORY = "not_a_repository"
    STATUS_QUERY = "status_query"
    REFERENCE_RESOLUTION = "reference_resolution"
    CONFIGURATION = "configuration"


class StatusQueryError(Exception):
    """Raised when a repository opened fine but its status could not be read."""

    def __init__(self, repository_path: str, reason: str):
        super().__init__(f"Could not retrieve status for {repository_path}: {reason}")
        self.repository_path = repository_path
        self.reason = reason


@dataclass
class ErrorResponse:
    """Standardized error response format."""
    error: str
    error_code: str
    message: str
    timestamp: str
    category: str
    context: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert error response to dictionary format."""
        result = {
            "error": self.error,
            "error_code": self.error_code,
            "message": self.message,
            "timestamp": self.timestamp,
            "category": self.category
        }
        if self.context:
            result["context"] = self.context
        return result


class ErrorHandler:
    """Maps scan failures to user-facing messages and logs them."""

    def __init__(self):
        self.logger = logging.getLogger('gitglance.error_handler')

    def handle_directory_error(self, error: Exception, context: Dict[str, Any] = None) -> ErrorResponse:
        """Handle errors reading the root directory. These abort the run."""
        context = context or {}

        # NotADirectoryError and PermissionError are OSError subclasses, check them first
        if isinstance(error, FileNotFoundError):
            error_code = "DIRECTORY_NOT_FOUND"
            message = "Directory not found."
        elif isinstance(error, PermissionError):
            error_code = "DIRECTORY_PERMISSION_DENIED"
            message = "Permission denied."
        elif isinstance(error, NotADirectoryError):
            error_code = "NOT_A_DIRECTORY"
            message = "Not a directory."
        else:
            error_code = "DIRECTORY_READ_ERROR"
            message = f"Could not read directory: {error}"

        error_response = ErrorResponse(
            error="Directory scan failed",
            error_code=error_code,
            message=message,
            timestamp=datetime.now().isoformat(),
            category=ErrorCategory.ENVIRONMENT.value,
            context=context
        )

        self.logger.error(
            f"Directory error: {message}",
            extra={
                'operation': 'directory_error',
                'error_code': error_code,
                'directory': context.get('directory')
            }
        )

        return error_response

    def handle_status_error(self, error: Exception, context: Dict[str, Any] = None) -> ErrorResponse:
        """Handle a per-repository classification failure. The run continues."""
        context = context or {}
        repository_path = context.get('repository_path', 'unknown')

        if isinstance(error, StatusQueryError):
            error_code = "STATUS_QUERY_FAILED"
        else:
            error_code = "STATUS_GENERAL_ERROR"

        error_response = ErrorResponse(
            error="Status check failed",
            error_code=error_code,
            message=f"Could not check status for {repository_path}",
            timestamp=datetime.now().isoformat(),
            category=ErrorCategory.STATUS_QUERY.value,
            context=context
        )

        self.logger.warning(
            f"Status check error for {repository_path}: {error}",
            extra={
                'operation': 'status_error',
                'error_code': error_code,
                'repository_path': repository_path
            }
        )

        return error_response

    def handle_configuration_error(self, error: Exception, context: Dict[str, Any] = None) -> ErrorResponse:
        """Handle invalid configuration values."""
        message = str(error)
        if not message.startswith("Configuration error"):
            message = f"Configuration error: {message}"

        error_response = ErrorResponse(
            error="Configuration invalid",
            error_code="CONFIGURATION_INVALID",
            message=message,
            timestamp=datetime.now().isoformat(),
            category=ErrorCategory.CONFIGURATION.value,
            context=context
        )

        self.logger.error(
            message,
            extra={'operation': 'configuration_error', 'error_code': "CONFIGURATION_INVALID"}
        )

        return error_response


# Initialize global error handler
error_handler = ErrorHandler()
