"""Tests for dynaquery exceptions."""

import pytest
from botocore.exceptions import ClientError

from dynaquery.exceptions import (
    DynamoDBClientError,
    DynaQueryError,
    ExpressionRejectedError,
    OperationError,
    TableNotFoundError,
    ThroughputExceededError,
    UnsupportedOperationError,
    wrap_client_error,
)


class TestExceptionHierarchy:
    """Test that exception hierarchy is correctly structured."""

    def test_operation_errors_inherit_from_operation_error(self) -> None:
        assert issubclass(OperationError, DynaQueryError)
        assert issubclass(TableNotFoundError, OperationError)
        assert issubclass(ThroughputExceededError, OperationError)
        assert issubclass(ExpressionRejectedError, OperationError)
        assert issubclass(DynamoDBClientError, OperationError)

    def test_unsupported_operation_is_not_an_operation_error(self) -> None:
        assert issubclass(UnsupportedOperationError, DynaQueryError)
        assert not issubclass(UnsupportedOperationError, OperationError)

    def test_can_catch_all_with_dynaquery_error(self) -> None:
        exceptions_to_test = [
            UnsupportedOperationError(operation="limit"),
            TableNotFoundError(),
            ThroughputExceededError(),
            ExpressionRejectedError("bad"),
            DynamoDBClientError("test"),
        ]

        for exc in exceptions_to_test:
            with pytest.raises(DynaQueryError):
                raise exc


class TestMessages:
    def test_unsupported_operation_error(self) -> None:
        exc = UnsupportedOperationError(operation="where_key")
        assert "where_key()" in str(exc)
        assert "filter-only" in str(exc)
        assert exc.operation == "where_key"

    def test_table_not_found_error(self) -> None:
        exc = TableNotFoundError(table_name="Users", operation="query")
        assert "Users" in str(exc)
        assert exc.table_name == "Users"
        assert exc.operation == "query"

    def test_throughput_exceeded_error(self) -> None:
        exc = ThroughputExceededError(operation="scan")
        assert "throughput" in str(exc).lower()
        assert "scan" in str(exc)

    def test_expression_rejected_error(self) -> None:
        exc = ExpressionRejectedError("Invalid KeyConditionExpression")
        assert "Invalid KeyConditionExpression" in str(exc)

    def test_dynamodb_client_error(self) -> None:
        exc = DynamoDBClientError("Something went wrong", error_code="InternalServerError")
        assert "InternalServerError" in str(exc)
        assert "Something went wrong" in str(exc)
        assert exc.error_code == "InternalServerError"


def _client_error(code: str, message: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": message}}, "Query")


class TestWrapClientError:
    def test_wrap_resource_not_found(self) -> None:
        error = _client_error("ResourceNotFoundException", "Requested resource not found")

        result = wrap_client_error(error, operation="query", table_name="Users")

        assert isinstance(result, TableNotFoundError)
        assert result.original_error is error
        assert result.table_name == "Users"

    @pytest.mark.parametrize(
        "code",
        [
            "ProvisionedThroughputExceededException",
            "ThrottlingException",
            "RequestLimitExceeded",
        ],
    )
    def test_wrap_throttling(self, code: str) -> None:
        result = wrap_client_error(_client_error(code, "Rate exceeded"), operation="scan")

        assert isinstance(result, ThroughputExceededError)
        assert result.operation == "scan"

    def test_wrap_validation_exception(self) -> None:
        error = _client_error("ValidationException", "Invalid FilterExpression")

        result = wrap_client_error(error, operation="query", table_name="Users")

        assert isinstance(result, ExpressionRejectedError)
        assert "Invalid FilterExpression" in str(result)

    def test_wrap_unknown_error(self) -> None:
        error = _client_error("SomeUnknownError", "Something went wrong")

        result = wrap_client_error(error, operation="query")

        assert isinstance(result, DynamoDBClientError)
        assert result.error_code == "SomeUnknownError"
        assert result.original_error is error
