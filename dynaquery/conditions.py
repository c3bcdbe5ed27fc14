"""Condition value object captured by the expression builder."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class Condition(BaseModel):
    """A single ``column condition value`` comparison.

    The operator is an opaque string such as ``"="``, ``">"`` or ``"<>"``, and the
    value is kept exactly as given. Neither is checked here: DynamoDB rejects
    malformed expressions when the request is executed.

    Example:
        Condition(column="status", condition="=", value="active")
        Renders as the fragment "#status = :status".

    """

    model_config = ConfigDict(frozen=True)

    column: str
    condition: str
    value: Any


__all__ = [
    "Condition",
]
