"""Shared test fixtures.

This module provides:
- Fake AWS credentials so boto3 never reaches a real account
- An in-process Orders table (moto) with a status GSI
- Sample order rows to seed it with
"""

from collections.abc import Generator
from decimal import Decimal
from os import environ

import boto3
from moto import mock_aws
from mypy_boto3_dynamodb.service_resource import Table
from pytest import fixture


ORDERS = [
    {"customer_id": "c-1", "order_id": "o-1", "status": "pending", "total": Decimal("25")},
    {"customer_id": "c-1", "order_id": "o-2", "status": "shipped", "total": Decimal("150")},
    {"customer_id": "c-1", "order_id": "o-3", "status": "shipped", "total": Decimal("80")},
    {"customer_id": "c-1", "order_id": "o-4", "status": "pending", "total": Decimal("300")},
    {"customer_id": "c-1", "order_id": "o-5", "status": "cancelled", "total": Decimal("10")},
    {"customer_id": "c-2", "order_id": "o-1", "status": "pending", "total": Decimal("45")},
]


@fixture(scope="session", autouse=True)
def aws_credentials() -> None:
    """Mocked AWS credentials for moto."""
    environ["AWS_ACCESS_KEY_ID"] = "testing"
    environ["AWS_SECRET_ACCESS_KEY"] = "testing"  # noqa: S105
    environ["AWS_SECURITY_TOKEN"] = "testing"  # noqa: S105
    environ["AWS_SESSION_TOKEN"] = "testing"  # noqa: S105
    environ["AWS_DEFAULT_REGION"] = "us-east-1"


@fixture
def orders_table() -> Generator[Table, None, None]:
    """Create the Orders table (customer_id + order_id) with a status-index GSI."""
    with mock_aws():
        dynamodb = boto3.resource("dynamodb")
        table = dynamodb.create_table(
            TableName="Orders",
            KeySchema=[
                {"AttributeName": "customer_id", "KeyType": "HASH"},
                {"AttributeName": "order_id", "KeyType": "RANGE"},
            ],
            AttributeDefinitions=[
                {"AttributeName": "customer_id", "AttributeType": "S"},
                {"AttributeName": "order_id", "AttributeType": "S"},
                {"AttributeName": "status", "AttributeType": "S"},
            ],
            GlobalSecondaryIndexes=[
                {
                    "IndexName": "status-index",
                    "KeySchema": [{"AttributeName": "status", "KeyType": "HASH"}],
                    "Projection": {"ProjectionType": "ALL"},
                },
            ],
            BillingMode="PAY_PER_REQUEST",
        )
        table.wait_until_exists()
        yield table
        table.delete()


@fixture
def seeded_orders_table(orders_table: Table) -> Table:
    """The Orders table filled with ORDERS."""
    with orders_table.batch_writer() as writer:
        for order in ORDERS:
            writer.put_item(Item=order)
    return orders_table
