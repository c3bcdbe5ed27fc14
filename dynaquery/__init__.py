"""dynaquery: fluent DynamoDB query and scan parameter builder."""

from loguru import logger

from dynaquery.async_executor import AsyncQueryExecutor
from dynaquery.base import ExecutorConfig, QueryResult
from dynaquery.conditions import Condition
from dynaquery.exceptions import (
    DynamoDBClientError,
    DynaQueryError,
    ExpressionRejectedError,
    OperationError,
    TableNotFoundError,
    ThroughputExceededError,
    UnsupportedOperationError,
)
from dynaquery.expressions import (
    ExpressionBuilder,
    RenderedRequest,
    name_placeholder,
    value_placeholder,
)
from dynaquery.keys import AttributeNameMap, AttributeValueMap, LastEvaluatedKey
from dynaquery.sync_executor import QueryExecutor

logger.disable("dynaquery")

__version__ = "0.1.0"

__all__ = [
    "AsyncQueryExecutor",
    "AttributeNameMap",
    "AttributeValueMap",
    "Condition",
    "DynaQueryError",
    "DynamoDBClientError",
    "ExecutorConfig",
    "ExpressionBuilder",
    "ExpressionRejectedError",
    "LastEvaluatedKey",
    "OperationError",
    "QueryExecutor",
    "QueryResult",
    "RenderedRequest",
    "TableNotFoundError",
    "ThroughputExceededError",
    "UnsupportedOperationError",
    "name_placeholder",
    "value_placeholder",
]
