"""
Tests for DynamoDB helpers.
"""
import pytest
from decimal import Decimal
from unittest.mock import Mock, patch

from src.utils import dynamo as dynamo_module
from src.utils.dynamo import (
    DynamoDBClient,
    get_dynamo,
    to_dynamo_item,
    from_dynamo_item,
    create_log_sk,
    create_report_sk,
    log_range_condition
)

@pytest.fixture
def table():
    with patch("src.utils.dynamo.boto3") as mock_boto3:
        mock_table = Mock()
        mock_boto3.resource.return_value.Table.return_value = mock_table
        yield DynamoDBClient("OviraTable"), mock_table

def test_get_dynamo_requires_table_name(monkeypatch):
    monkeypatch.delenv("OVIRA_TABLE_NAME", raising=False)
    monkeypatch.setattr(dynamo_module, "_dynamo_instance", None)

    with pytest.raises(EnvironmentError):
        get_dynamo()

def test_to_dynamo_item_converts_floats():
    item = to_dynamo_item({"sleep_hours": 7.5, "pain_level": 3, "nested": {"avg": 2.25}})

    assert item["sleep_hours"] == Decimal("7.5")
    assert item["pain_level"] == 3
    assert item["nested"]["avg"] == Decimal("2.25")

def test_from_dynamo_item_restores_numbers_and_drops_keys():
    item = from_dynamo_item({
        "PK": "USER#1",
        "SK": "PROFILE",
        "average_cycle_length": Decimal("28"),
        "sleep": Decimal("7.5"),
        "counts": [Decimal("1")]
    })

    assert item == {"average_cycle_length": 28, "sleep": 7.5, "counts": [1]}
    assert isinstance(item["average_cycle_length"], int)

def test_sort_keys():
    assert create_log_sk("2024-03-05", "abc") == "LOG#2024-03-05#abc"
    assert create_report_sk("2024-03-08T12:00:00", "r1") == "REPORT#2024-03-08T12:00:00#r1"

def test_log_range_condition():
    expression = log_range_condition("2024-03-01", "2024-03-07").get_expression()

    assert expression["operator"] == "BETWEEN"
    assert expression["values"][1:] == ("LOG#2024-03-01", "LOG#2024-03-07#\uffff")
    assert log_range_condition().get_expression()["operator"] == "begins_with"

def test_query_items_follows_pagination(table):
    client, mock_table = table
    mock_table.query.side_effect = [
        {"Items": [{"SK": "LOG#1"}], "LastEvaluatedKey": {"SK": "LOG#1"}},
        {"Items": [{"SK": "LOG#2"}]},
    ]

    items = client.query_items("PK", "USER#1", scan_forward=False)

    assert items == [{"SK": "LOG#1"}, {"SK": "LOG#2"}]
    assert mock_table.query.call_args[1]["ExclusiveStartKey"] == {"SK": "LOG#1"}
    assert mock_table.query.call_args[1]["ScanIndexForward"] is False

def test_query_items_stops_at_limit(table):
    client, mock_table = table
    mock_table.query.return_value = {
        "Items": [{"SK": "LOG#1"}, {"SK": "LOG#2"}],
        "LastEvaluatedKey": {"SK": "LOG#2"}
    }

    items = client.query_items("PK", "USER#1", limit=2)

    assert len(items) == 2
    assert mock_table.query.call_count == 1
    assert mock_table.query.call_args[1]["Limit"] == 2
