"""Run rendered builders against a boto3 DynamoDB Table.

This module provides the synchronous QueryExecutor. It renders an
ExpressionBuilder, hands the parameters to ``Table.query()`` or ``Table.scan()``
and returns the items with the pagination token.
"""

from typing import Any

from botocore.exceptions import ClientError, ParamValidationError
from loguru import logger
from pydantic import BaseModel

from dynaquery.base import QueryResult, SyncTable, _QueryExecutorBase
from dynaquery.exceptions import ExpressionRejectedError, wrap_client_error
from dynaquery.expressions import ExpressionBuilder
from dynaquery.keys import LastEvaluatedKey


class QueryExecutor(_QueryExecutorBase[SyncTable]):
    """Executes ExpressionBuilder requests with a boto3 Table resource.

    Example:
        table = boto3.resource("dynamodb").Table("Users")
        executor = QueryExecutor(ExecutorConfig(table=table))

        builder = ExpressionBuilder("Users").where_key("id", "=", "123")
        result = executor.query(builder)
        for item in result.items:
            print(item["status"])

    """

    def _call(
        self,
        builder: ExpressionBuilder,
        *,
        operation: str,
        exclusive_start_key: LastEvaluatedKey | None,
        model: type[BaseModel] | None,
    ) -> QueryResult:
        request_kwargs = self._build_request_kwargs(
            builder, operation=operation, exclusive_start_key=exclusive_start_key
        )
        logger.debug("Running {} on {}", operation, builder.table_name)

        try:
            response = getattr(self.table, operation)(**request_kwargs)
        except ClientError as e:
            raise wrap_client_error(
                e, operation=operation, table_name=builder.table_name
            ) from e
        except ParamValidationError as e:
            # botocore refuses some rendered values (e.g. Limit < 1) before sending.
            raise ExpressionRejectedError(
                str(e),
                operation=operation,
                table_name=builder.table_name,
                original_error=e,
            ) from e

        return self._build_result(response, model=model)

    def _call_all(
        self,
        builder: ExpressionBuilder,
        *,
        operation: str,
        model: type[BaseModel] | None,
    ) -> list[Any]:
        all_items: list[Any] = []
        last_key: LastEvaluatedKey | None = None
        pages = 0

        while True:
            items, last_key = self._call(
                builder, operation=operation, exclusive_start_key=last_key, model=model
            )
            all_items.extend(items)
            pages += 1

            if last_key is None:
                break

        logger.debug(
            "Fetched {} item(s) in {} page(s) from {}", len(all_items), pages, builder.table_name
        )
        return all_items

    def query(
        self,
        builder: ExpressionBuilder,
        *,
        exclusive_start_key: LastEvaluatedKey | None = None,
        model: type[BaseModel] | None = None,
    ) -> QueryResult:
        """Query one page of items.

        Args:
            builder: The builder describing the request. It needs at least one
                key condition for DynamoDB to accept the query.
            exclusive_start_key: Key to start from for pagination.
            model: Optional pydantic model to validate items into.

        Returns:
            QueryResult containing items and last_evaluated_key.

        Raises:
            ExpressionRejectedError: If DynamoDB rejects the rendered expression.
            TableNotFoundError: If the table does not exist.
            ThroughputExceededError: If the request was throttled.

        """
        return self._call(
            builder, operation="query", exclusive_start_key=exclusive_start_key, model=model
        )

    def query_all(
        self,
        builder: ExpressionBuilder,
        *,
        model: type[BaseModel] | None = None,
    ) -> list[Any]:
        """Query all pages, following LastEvaluatedKey until exhausted.

        A limit set on the builder caps each page, not the total.
        """
        return self._call_all(builder, operation="query", model=model)

    def scan(
        self,
        builder: ExpressionBuilder,
        *,
        exclusive_start_key: LastEvaluatedKey | None = None,
        model: type[BaseModel] | None = None,
    ) -> QueryResult:
        """Scan one page of items.

        Key conditions on the builder are dropped, since scans do not accept them.

        Raises:
            ExpressionRejectedError: If DynamoDB rejects the rendered expression.

        """
        return self._call(
            builder, operation="scan", exclusive_start_key=exclusive_start_key, model=model
        )

    def scan_all(
        self,
        builder: ExpressionBuilder,
        *,
        model: type[BaseModel] | None = None,
    ) -> list[Any]:
        """Scan all pages, following LastEvaluatedKey until exhausted."""
        return self._call_all(builder, operation="scan", model=model)


__all__ = [
    "QueryExecutor",
]
