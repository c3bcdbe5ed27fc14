"""Fluent builder for DynamoDB query and scan parameters.

This module provides ExpressionBuilder, which collects key conditions, filter
conditions, an optional index and an optional limit, and renders them into the
keyword arguments accepted by boto3's ``Table.query()`` and ``Table.scan()``.

Every column is referenced through placeholders: ``#column`` in
ExpressionAttributeNames and ``:column`` in ExpressionAttributeValues. Fragments
have the form ``"#column condition :column"`` and are joined with ``" AND "``.

Example:
    params = (
        ExpressionBuilder("Users")
        .where_key("id", "=", "123")
        .where("status", "=", "active")
        .limit(10)
        .render()
    )
    table.query(**params)

"""

from collections.abc import Sequence
from typing import Any

from loguru import logger
from typing_extensions import NotRequired, Self, TypedDict

from dynaquery.conditions import Condition
from dynaquery.exceptions import UnsupportedOperationError
from dynaquery.keys import AttributeNameMap, AttributeValueMap

NAME_PREFIX = "#"
VALUE_PREFIX = ":"
CONJUNCTION = " AND "


class RenderedRequest(TypedDict):
    """Parameters rendered by ExpressionBuilder.render().

    Only the two attribute maps are always present. TableName is omitted by
    filter-only builders, which in turn always carry FilterExpression.
    """

    ExpressionAttributeNames: AttributeNameMap
    ExpressionAttributeValues: AttributeValueMap
    TableName: NotRequired[str]
    KeyConditionExpression: NotRequired[str]
    FilterExpression: NotRequired[str]
    Limit: NotRequired[int]
    IndexName: NotRequired[str]


def name_placeholder(column: str) -> str:
    """Return the ExpressionAttributeNames placeholder for a column."""
    return f"{NAME_PREFIX}{column}"


def value_placeholder(column: str) -> str:
    """Return the ExpressionAttributeValues placeholder for a column."""
    return f"{VALUE_PREFIX}{column}"


class ExpressionBuilder:
    """Accumulates query configuration and renders DynamoDB request parameters.

    Every mutator returns the builder so calls can be chained. Nothing is
    validated: operators, columns and values are rendered as given.

    Two output shapes are supported:

    - The default builder renders TableName, the attribute maps, and whichever of
      KeyConditionExpression, FilterExpression, Limit and IndexName were set.
    - A builder created with ``filter_only=True`` renders only FilterExpression
      (always, even when empty) and the attribute maps. Key conditions, index
      selection and limits raise UnsupportedOperationError.

    The attribute maps live on the builder and are updated in place by every
    render. Rendering twice gives identical maps; conditions added between
    renders grow them. A column used by two conditions shares its placeholders,
    so the condition rendered last owns the map entries.

    Example:
        ExpressionBuilder("Orders", filter_only=True).where("total", ">", "100").render()
        Returns:
        {
            "FilterExpression": "#total > :total",
            "ExpressionAttributeNames": {"#total": "total"},
            "ExpressionAttributeValues": {":total": "100"},
        }

    Attributes:
        table_name: The table the request targets.
        filter_only: Whether the builder renders the filter-only shape.
        index_name: Secondary index set by use_index(), if any.
        key_conditions: Key conditions in append order.
        filter_conditions: Filter conditions in append order.
        attribute_names: Shared placeholder to column name map.
        attribute_values: Shared placeholder to value map.
        result_limit: Limit set by limit(), if any.

    """

    def __init__(self, table_name: str, *, filter_only: bool = False) -> None:
        self.table_name = table_name
        self.filter_only = filter_only
        self.index_name: str | None = None
        self.key_conditions: list[Condition] = []
        self.filter_conditions: list[Condition] = []
        self.attribute_names: AttributeNameMap = {}
        self.attribute_values: AttributeValueMap = {}
        self.result_limit: int | None = None

    def _require_key_support(self, operation: str) -> None:
        if self.filter_only:
            raise UnsupportedOperationError(operation=operation)

    def use_index(self, index_name: str) -> Self:
        """Query a secondary index instead of the table's primary key.

        Calling this again replaces the previous index.
        """
        self._require_key_support("use_index")
        self.index_name = index_name
        return self

    def where_key(self, column: str, condition: str, value: Any) -> Self:
        """Add a key condition.

        Args:
            column: The key attribute name.
            condition: The comparison operator, e.g. "=" or "<=".
            value: The value to compare against, passed through as is.

        Raises:
            UnsupportedOperationError: If the builder is filter-only.

        """
        self._require_key_support("where_key")
        self.key_conditions.append(Condition(column=column, condition=condition, value=value))
        return self

    def where(self, column: str, condition: str, value: Any) -> Self:
        """Add a filter condition.

        Args:
            column: The attribute name.
            condition: The comparison operator, e.g. "=" or ">".
            value: The value to compare against, passed through as is.

        """
        self.filter_conditions.append(Condition(column=column, condition=condition, value=value))
        return self

    def limit(self, amount: int) -> Self:
        """Cap the number of items evaluated per request.

        The value is not range checked. Calling this again replaces it.
        """
        self._require_key_support("limit")
        self.result_limit = amount
        return self

    def _render_conditions(self, conditions: Sequence[Condition]) -> list[str]:
        """Render conditions into fragments, registering their placeholders."""
        fragments: list[str] = []
        for condition in conditions:
            name = name_placeholder(condition.column)
            value = value_placeholder(condition.column)
            fragments.append(f"{name} {condition.condition} {value}")
            self.attribute_names[name] = condition.column
            self.attribute_values[value] = condition.value
        return fragments

    def render(self) -> RenderedRequest:
        """Render the accumulated state into request parameters.

        Key conditions are rendered before filter conditions, both into the
        shared attribute maps. The returned maps are the builder's own objects.

        Returns:
            The parameters to pass to ``Table.query()`` or ``Table.scan()``.

        """
        key_fragments = self._render_conditions(self.key_conditions)
        filter_fragments = self._render_conditions(self.filter_conditions)

        result = RenderedRequest(
            ExpressionAttributeNames=self.attribute_names,
            ExpressionAttributeValues=self.attribute_values,
        )

        if self.filter_only:
            # The filter-only shape always carries its expression, even empty.
            result["FilterExpression"] = CONJUNCTION.join(filter_fragments)
        else:
            result["TableName"] = self.table_name
            if key_fragments:
                result["KeyConditionExpression"] = CONJUNCTION.join(key_fragments)
            if filter_fragments:
                result["FilterExpression"] = CONJUNCTION.join(filter_fragments)
            if self.result_limit is not None:
                result["Limit"] = self.result_limit
            if self.index_name is not None:
                result["IndexName"] = self.index_name

        logger.debug(
            "Rendered request for {}: {} key condition(s), {} filter condition(s), "
            "index={}, limit={}",
            self.table_name,
            len(key_fragments),
            len(filter_fragments),
            self.index_name,
            self.result_limit,
        )
        return result

    get = render

    def __repr__(self) -> str:
        return (
            f"ExpressionBuilder({self.table_name!r}, filter_only={self.filter_only}, "
            f"key_conditions={len(self.key_conditions)}, "
            f"filter_conditions={len(self.filter_conditions)})"
        )


__all__ = [
    "CONJUNCTION",
    "ExpressionBuilder",
    "RenderedRequest",
    "name_placeholder",
    "value_placeholder",
]
