"""
Single-table DynamoDB access.

All records live in one table keyed by ``PK`` (the user) and ``SK``
(the record type plus its sort value):

    PK = USER#<uid>   SK = PROFILE
    PK = USER#<uid>   SK = LOG#<yyyy-mm-dd>#<log id>
    PK = USER#<uid>   SK = REPORT#<generated at>#<report id>
"""
import os
import json
from decimal import Decimal
from typing import Dict, List, Optional, Any
import boto3
from boto3.dynamodb.conditions import Key

# Shared across invocations of a warm Lambda container
_dynamo_instance = None

def get_dynamo() -> 'DynamoDBClient':
    """
    Return the table client shared by the repositories.
    
    Example:
        dynamo = get_dynamo()
        profile = dynamo.get_item({"PK": create_pk(uid), "SK": create_profile_sk()})
    
    Returns:
        DynamoDBClient for the table named by ``OVIRA_TABLE_NAME``
        
    Raises:
        EnvironmentError: If OVIRA_TABLE_NAME environment variable is not set
    """
    global _dynamo_instance
    if _dynamo_instance is None:
        table_name = os.environ.get('OVIRA_TABLE_NAME')
        if not table_name:
            raise EnvironmentError(
                "OVIRA_TABLE_NAME environment variable not set. "
                "It must name the table holding profiles, logs and reports."
            )
        _dynamo_instance = DynamoDBClient(table_name)
    return _dynamo_instance

class DynamoDBClient:
    """Thin wrapper over a boto3 Table resource."""
    
    def __init__(self, table_name: str):
        self.dynamodb = boto3.resource('dynamodb')
        self.table = self.dynamodb.Table(table_name)
    
    def put_item(self, item: Dict[str, Any]) -> Dict[str, Any]:
        """
        Write a record, replacing any record with the same key.
        
        Args:
            item: Record attributes including ``PK`` and ``SK``. Floats are
                converted to Decimal as the resource API requires.
        """
        return self.table.put_item(Item=to_dynamo_item(item))
    
    def get_item(self, key: Dict[str, str]) -> Optional[Dict[str, Any]]:
        """Read one record by ``PK``/``SK``; None when it does not exist."""
        return self.table.get_item(Key=key).get('Item')
    
    def query_items(
        self,
        partition_key: str,
        partition_value: str,
        sort_key_condition: Optional[Key] = None,
        scan_forward: bool = True,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """
        Read the records of one partition.
        
        Follows pagination until ``limit`` items were collected or the
        partition is exhausted.
        
        Args:
            partition_key: Partition key attribute name, normally ``PK``
            partition_value: Partition to read, e.g. ``USER#<uid>``
            sort_key_condition: Optional condition on ``SK``, e.g. a log date range
            scan_forward: False to return items in descending sort key order
            limit: Optional maximum number of items
            
        Returns:
            Matching records in sort key order
        """
        condition = Key(partition_key).eq(partition_value)
        if sort_key_condition is not None:
            condition = condition & sort_key_condition
        
        params = {
            "KeyConditionExpression": condition,
            "ScanIndexForward": scan_forward
        }
        items: List[Dict[str, Any]] = []
        while True:
            if limit is not None:
                params["Limit"] = limit - len(items)
            response = self.table.query(**params)
            items.extend(response.get('Items', []))
            last_key = response.get('LastEvaluatedKey')
            if not last_key or (limit is not None and len(items) >= limit):
                return items
            params["ExclusiveStartKey"] = last_key
    
    def update_item(
        self,
        key: Dict[str, str],
        update_expression: str,
        expression_values: Dict[str, Any],
        expression_names: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        """
        Apply an update expression to one record.
        
        Args:
            key: ``PK``/``SK`` of the record
            update_expression: e.g. ``SET #language = :language``
            expression_values: Values for the ``:placeholders``
            expression_names: Attribute names for the ``#placeholders``
            
        Returns:
            DynamoDB response; ``Attributes`` holds the updated record
        """
        params = {
            "Key": key,
            "UpdateExpression": update_expression,
            "ExpressionAttributeValues": to_dynamo_item(expression_values),
            "ReturnValues": "ALL_NEW"
        }
        if expression_names:
            params["ExpressionAttributeNames"] = expression_names
        return self.table.update_item(**params)
    
    def delete_item(self, key: Dict[str, str]) -> Dict[str, Any]:
        """Delete one record by ``PK``/``SK``."""
        return self.table.delete_item(Key=key)

def to_dynamo_item(item: Dict[str, Any]) -> Dict[str, Any]:
    """Round-trip through JSON so floats become Decimal and dates become strings."""
    return json.loads(json.dumps(item, default=str), parse_float=Decimal)

def from_dynamo_item(item: Dict[str, Any]) -> Dict[str, Any]:
    """Convert Decimal values back to int or float and drop table keys."""
    return {
        key: _from_decimal(value)
        for key, value in item.items()
        if key not in ("PK", "SK")
    }

def _from_decimal(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, list):
        return [_from_decimal(v) for v in value]
    if isinstance(value, dict):
        return {k: _from_decimal(v) for k, v in value.items()}
    return value

def create_pk(user_id: str) -> str:
    """Partition key holding every record of a user."""
    return f"USER#{user_id}"

def create_profile_sk() -> str:
    """Create sort key for the user profile."""
    return "PROFILE"

def create_log_sk(date_str: str, log_id: str) -> str:
    """
    Create sort key for symptom logs.
    
    The date comes first so logs sort chronologically and date ranges can
    be queried with a BETWEEN condition.
    """
    return f"LOG#{date_str}#{log_id}"

def log_range_condition(start_date: Optional[str] = None, end_date: Optional[str] = None) -> Key:
    """
    Sort key condition selecting logs between two ISO dates, inclusive.
    
    Args:
        start_date: Optional first date
        end_date: Optional last date
        
    Returns:
        Sort key condition for query_items
    """
    if not start_date and not end_date:
        return Key("SK").begins_with("LOG#")
    lower = f"LOG#{start_date}" if start_date else "LOG#"
    upper = f"LOG#{end_date}#\uffff" if end_date else "LOG#\uffff"
    return Key("SK").between(lower, upper)

def create_report_sk(generated_at: str, report_id: str) -> str:
    """Create sort key for saved health reports."""
    return f"REPORT#{generated_at}#{report_id}"
