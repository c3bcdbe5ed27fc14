"""Run rendered builders against an aioboto3 DynamoDB Table.

This module provides AsyncQueryExecutor, the async counterpart of QueryExecutor.
"""

from typing import Any

from botocore.exceptions import ClientError, ParamValidationError
from loguru import logger
from pydantic import BaseModel

from dynaquery.base import AsyncTable, QueryResult, _QueryExecutorBase
from dynaquery.exceptions import ExpressionRejectedError, wrap_client_error
from dynaquery.expressions import ExpressionBuilder
from dynaquery.keys import LastEvaluatedKey


class AsyncQueryExecutor(_QueryExecutorBase[AsyncTable]):
    """Executes ExpressionBuilder requests with an aioboto3 Table resource.

    Example:
        session = aioboto3.Session()

        async def main():
            async with session.resource("dynamodb") as dynamodb:
                table = await dynamodb.Table("Users")
                executor = AsyncQueryExecutor(ExecutorConfig(table=table))

                builder = ExpressionBuilder("Users").where_key("id", "=", "123")
                result = await executor.query(builder)

    """

    async def _call(
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
        logger.debug("Running async {} on {}", operation, builder.table_name)

        try:
            response = await getattr(self.table, operation)(**request_kwargs)
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

    async def _call_all(
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
            items, last_key = await self._call(
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

    async def query(
        self,
        builder: ExpressionBuilder,
        *,
        exclusive_start_key: LastEvaluatedKey | None = None,
        model: type[BaseModel] | None = None,
    ) -> QueryResult:
        """Query one page of items.

        Args:
            builder: The builder describing the request.
            exclusive_start_key: Key to start from for pagination.
            model: Optional pydantic model to validate items into.

        Returns:
            QueryResult containing items and last_evaluated_key.

        """
        return await self._call(
            builder, operation="query", exclusive_start_key=exclusive_start_key, model=model
        )

    async def query_all(
        self,
        builder: ExpressionBuilder,
        *,
        model: type[BaseModel] | None = None,
    ) -> list[Any]:
        """Query all pages, following LastEvaluatedKey until exhausted."""
        return await self._call_all(builder, operation="query", model=model)

    async def scan(
        self,
        builder: ExpressionBuilder,
        *,
        exclusive_start_key: LastEvaluatedKey | None = None,
        model: type[BaseModel] | None = None,
    ) -> QueryResult:
        """Scan one page of items. Key conditions on the builder are dropped."""
        return await self._call(
            builder, operation="scan", exclusive_start_key=exclusive_start_key, model=model
        )

    async def scan_all(
        self,
        builder: ExpressionBuilder,
        *,
        model: type[BaseModel] | None = None,
    ) -> list[Any]:
        """Scan all pages, following LastEvaluatedKey until exhausted."""
        return await self._call_all(builder, operation="scan", model=model)


__all__ = [
    "AsyncQueryExecutor",
]
