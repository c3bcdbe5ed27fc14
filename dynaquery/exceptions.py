"""dynaquery exceptions.

This module defines the exception hierarchy for the dynaquery library.
All custom exceptions inherit from DynaQueryError, allowing users to catch
all library-specific errors with a single except clause.

Exception categories:
- DynaQueryError: Base exception for all dynaquery errors
- UnsupportedOperationError: Builder variant does not support the call
- OperationError: A DynamoDB call made by an executor failed
  - TableNotFoundError: The table does not exist
  - ThroughputExceededError: The request was throttled
  - ExpressionRejectedError: DynamoDB or botocore rejected the rendered request
  - DynamoDBClientError: Any other DynamoDB error

Note: The expression builder itself never validates its input. Operators, column
names and values are rendered as given, and a malformed expression surfaces as
ExpressionRejectedError when it is executed. Pydantic validation errors raised
while validating items into models are not wrapped.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from botocore.exceptions import ClientError


class DynaQueryError(Exception):
    """Base exception for all dynaquery errors.

    Example:
        try:
            executor.query(builder)
        except DynaQueryError as e:
            pass

    """


class UnsupportedOperationError(DynaQueryError):
    """Raised when a builder variant does not support the requested call.

    A filter-only builder renders nothing but a filter expression, so key
    conditions, index selection and limits are refused.

    Example:
        ExpressionBuilder("Orders", filter_only=True).where_key("id", "=", "1")
        Raises UnsupportedOperationError.

    Attributes:
        operation: The refused builder method.

    """

    def __init__(self, *, operation: str) -> None:
        self.operation = operation
        super().__init__(f"{operation}() is not supported by a filter-only builder")


class OperationError(DynaQueryError):
    """Base class for failures of a DynamoDB call made by an executor.

    Attributes:
        operation: The DynamoDB operation that failed (query, scan).
        table_name: The table the operation ran against.
        original_error: The underlying botocore error, if any.

    """

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        table_name: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        self.operation = operation
        self.table_name = table_name
        self.original_error = original_error
        super().__init__(message)


class TableNotFoundError(OperationError):
    """Raised when the DynamoDB table does not exist."""

    def __init__(
        self,
        *,
        operation: str | None = None,
        table_name: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        message = "Table not found"
        if table_name:
            message = f"Table '{table_name}' not found"
        super().__init__(
            message,
            operation=operation,
            table_name=table_name,
            original_error=original_error,
        )


class ThroughputExceededError(OperationError):
    """Raised when DynamoDB throttles the request."""

    def __init__(
        self,
        *,
        operation: str | None = None,
        table_name: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        message = "Provisioned throughput exceeded"
        if operation:
            message = f"Provisioned throughput exceeded during {operation} operation"
        super().__init__(
            message,
            operation=operation,
            table_name=table_name,
            original_error=original_error,
        )


class ExpressionRejectedError(OperationError):
    """Raised when DynamoDB rejects the rendered request.

    This is where bad operator strings, reserved placeholders or colliding
    columns end up, since the builder renders them without complaint.

    Example:
        builder = ExpressionBuilder("Users").where_key("id", "LIKE", "1")
        executor.query(builder)
        Raises ExpressionRejectedError with DynamoDB's message.

    """

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        table_name: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(
            f"Expression rejected: {message}",
            operation=operation,
            table_name=table_name,
            original_error=original_error,
        )


class DynamoDBClientError(OperationError):
    """Raised for DynamoDB errors without a more specific mapping.

    Attributes:
        error_code: The DynamoDB error code.

    """

    def __init__(
        self,
        message: str,
        *,
        error_code: str | None = None,
        operation: str | None = None,
        table_name: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        self.error_code = error_code
        if error_code:
            message = f"{error_code}: {message}"
        super().__init__(
            message,
            operation=operation,
            table_name=table_name,
            original_error=original_error,
        )


_THROTTLING_CODES = frozenset(
    {
        "ProvisionedThroughputExceededException",
        "ThrottlingException",
        "RequestLimitExceeded",
    }
)


def wrap_client_error(
    error: "ClientError",
    *,
    operation: str | None = None,
    table_name: str | None = None,
) -> OperationError:
    """Map a botocore ClientError to the matching dynaquery exception.

    Args:
        error: The error raised by boto3 or aioboto3.
        operation: The operation that failed.
        table_name: The table the operation ran against.

    Returns:
        The dynaquery exception to raise, chained by the caller.

    """
    error_info = error.response.get("Error", {})
    code = error_info.get("Code", "")
    message = error_info.get("Message", str(error))

    if code == "ResourceNotFoundException":
        return TableNotFoundError(
            operation=operation, table_name=table_name, original_error=error
        )
    if code in _THROTTLING_CODES:
        return ThroughputExceededError(
            operation=operation, table_name=table_name, original_error=error
        )
    if code == "ValidationException":
        return ExpressionRejectedError(
            message, operation=operation, table_name=table_name, original_error=error
        )
    return DynamoDBClientError(
        message,
        error_code=code or None,
        operation=operation,
        table_name=table_name,
        original_error=error,
    )


__all__ = [
    "DynaQueryError",
    "DynamoDBClientError",
    "ExpressionRejectedError",
    "OperationError",
    "TableNotFoundError",
    "ThroughputExceededError",
    "UnsupportedOperationError",
    "wrap_client_error",
]
