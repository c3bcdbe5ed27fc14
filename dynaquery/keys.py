"""Type aliases for expression attribute maps and pagination.

Type aliases:
    AttributeNameMap: Maps a name placeholder (``#column``) to the raw column name.
        Example: {"#id": "id", "#status": "status"}

    AttributeValueMap: Maps a value placeholder (``:column``) to the raw value.
        Values are passed through untouched.
        Example: {":id": "123", ":status": "active"}

    LastEvaluatedKey: The pagination token returned by query() and scan() operations.
        Pass this to exclusive_start_key to continue pagination.
"""

from decimal import Decimal
from typing import Any, TypeAlias

from typing_extensions import TypeAliasType

KeyValue: TypeAlias = str | bytes | bytearray | int | Decimal
AttributeNameMap: TypeAlias = dict[str, str]
AttributeValueMap: TypeAlias = dict[str, Any]
LastEvaluatedKey = TypeAliasType("LastEvaluatedKey", dict[str, KeyValue])


__all__ = [
    "AttributeNameMap",
    "AttributeValueMap",
    "KeyValue",
    "LastEvaluatedKey",
]
