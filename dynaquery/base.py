"""Shared base functionality for dynaquery executors.

This module provides _QueryExecutorBase, which holds the logic shared between the
synchronous and asynchronous executors: turning a rendered builder into the
keyword arguments for ``Table.query()`` / ``Table.scan()`` and turning the
response into a QueryResult.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Generic, NamedTuple, TypeVar

from loguru import logger
from pydantic import BaseModel
from typing_extensions import NotRequired, TypedDict

from dynaquery.expressions import ExpressionBuilder, value_placeholder
from dynaquery.keys import LastEvaluatedKey

if TYPE_CHECKING:
    from mypy_boto3_dynamodb.service_resource import Table as SyncTable
    from types_aiobotocore_dynamodb.service_resource import Table as AsyncTable
else:
    SyncTable = Any
    AsyncTable = Any

Table = TypeVar("Table", SyncTable, AsyncTable)


class QueryResult(NamedTuple):
    """Result of a single query or scan page.

    Attributes:
        items: The returned items, validated into model instances when a model
            was given.
        last_evaluated_key: Pagination token for the next page, if any.

    """

    items: list[Any]
    last_evaluated_key: LastEvaluatedKey | None


class ExecutorConfig(TypedDict, Generic[Table]):
    """Configuration for an executor.

    Attributes:
        table: The DynamoDB Table resource requests run against.
        consistent_read: Whether to request strongly consistent reads.
            Defaults to False. Not supported on global secondary indexes.

    """

    table: Table
    consistent_read: NotRequired[bool]


class _QueryExecutorBase(Generic[Table]):
    """Internal base class containing shared logic for sync and async executors.

    Do not use this directly. Use QueryExecutor or AsyncQueryExecutor instead.
    """

    def __init__(self, config: ExecutorConfig[Table]) -> None:
        self.config = config

    @property
    def table(self) -> Table:
        return self.config["table"]

    @property
    def consistent_read(self) -> bool:
        return self.config.get("consistent_read", False)

    def _build_request_kwargs(
        self,
        builder: ExpressionBuilder,
        *,
        operation: str,
        exclusive_start_key: LastEvaluatedKey | None,
    ) -> dict[str, Any]:
        """Build kwargs for a query or scan call from a builder.

        TableName is dropped because the Table resource supplies it. Scans have no
        key condition, so a KeyConditionExpression is dropped with a warning.

        Args:
            builder: The builder to render.
            operation: "query" or "scan".
            exclusive_start_key: Pagination token.

        Returns:
            Dictionary of kwargs to pass to table.query() or table.scan().

        """
        request_kwargs: dict[str, Any] = dict(builder.render())
        request_kwargs.pop("TableName", None)

        if operation == "scan" and "KeyConditionExpression" in request_kwargs:
            logger.warning(
                "Dropping KeyConditionExpression {!r} from scan on {}",
                request_kwargs.pop("KeyConditionExpression"),
                builder.table_name,
            )
            # DynamoDB rejects placeholders no expression references.
            columns = {condition.column for condition in builder.filter_conditions}
            value_placeholders = {value_placeholder(column) for column in columns}
            request_kwargs["ExpressionAttributeNames"] = {
                name: column
                for name, column in request_kwargs["ExpressionAttributeNames"].items()
                if column in columns
            }
            request_kwargs["ExpressionAttributeValues"] = {
                placeholder: value
                for placeholder, value in request_kwargs["ExpressionAttributeValues"].items()
                if placeholder in value_placeholders
            }

        # DynamoDB rejects an empty FilterExpression.
        if request_kwargs.get("FilterExpression") == "":
            del request_kwargs["FilterExpression"]

        # DynamoDB also rejects empty attribute maps.
        for field in ("ExpressionAttributeNames", "ExpressionAttributeValues"):
            if not request_kwargs[field]:
                del request_kwargs[field]

        if self.consistent_read:
            request_kwargs["ConsistentRead"] = True

        if exclusive_start_key is not None:
            request_kwargs["ExclusiveStartKey"] = exclusive_start_key

        return request_kwargs

    @staticmethod
    def _build_result(
        response: Mapping[str, Any],
        *,
        model: type[BaseModel] | None,
    ) -> QueryResult:
        raw_items = response.get("Items", [])
        items: list[Any] = (
            [model.model_validate(item) for item in raw_items] if model is not None else raw_items
        )
        return QueryResult(
            items=items,
            last_evaluated_key=response.get("LastEvaluatedKey"),
        )


__all__ = [
    "AsyncTable",
    "ExecutorConfig",
    "QueryResult",
    "SyncTable",
    "_QueryExecutorBase",
]
