"""Shared fixtures: mocked DynamoDB tables and sample events."""
from datetime import datetime, timedelta, timezone

import boto3
import pytest
from moto import mock_aws

from processor.models import Event, EventCandidate, to_timestamp
from storage.dynamodb_manager import DynamoDBManager

EVENTS_TABLE = 'test-events'
CAPTURES_TABLE = 'test-email-captures'


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Fake credentials so boto3 never reaches a real account."""
    monkeypatch.setenv('AWS_ACCESS_KEY_ID', 'testing')
    monkeypatch.setenv('AWS_SECRET_ACCESS_KEY', 'testing')
    monkeypatch.setenv('AWS_SECURITY_TOKEN', 'testing')
    monkeypatch.setenv('AWS_SESSION_TOKEN', 'testing')
    monkeypatch.setenv('AWS_DEFAULT_REGION', 'us-east-1')
    monkeypatch.delenv('STORE_ENDPOINT_URL', raising=False)
    monkeypatch.delenv('SYNC_API_TOKEN', raising=False)


@pytest.fixture
def dynamodb_tables():
    """Create mock events and email_captures tables."""
    with mock_aws():
        dynamodb = boto3.resource('dynamodb', region_name='us-east-1')
        throughput = {'ReadCapacityUnits': 5, 'WriteCapacityUnits': 5}

        events = dynamodb.create_table(
            TableName=EVENTS_TABLE,
            KeySchema=[{'AttributeName': 'id', 'KeyType': 'HASH'}],
            AttributeDefinitions=[
                {'AttributeName': 'id', 'AttributeType': 'S'},
                {'AttributeName': 'original_url', 'AttributeType': 'S'}
            ],
            GlobalSecondaryIndexes=[
                {
                    'IndexName': 'original_url-index',
                    'KeySchema': [{'AttributeName': 'original_url', 'KeyType': 'HASH'}],
                    'Projection': {'ProjectionType': 'ALL'},
                    'ProvisionedThroughput': throughput
                }
            ],
            BillingMode='PROVISIONED',
            ProvisionedThroughput=throughput
        )
        captures = dynamodb.create_table(
            TableName=CAPTURES_TABLE,
            KeySchema=[{'AttributeName': 'id', 'KeyType': 'HASH'}],
            AttributeDefinitions=[{'AttributeName': 'id', 'AttributeType': 'S'}],
            BillingMode='PROVISIONED',
            ProvisionedThroughput=throughput
        )

        yield events, captures


@pytest.fixture
def events_table(dynamodb_tables):
    return dynamodb_tables[0]


@pytest.fixture
def captures_table(dynamodb_tables):
    return dynamodb_tables[1]


@pytest.fixture
def store(dynamodb_tables):
    """DynamoDBManager bound to the mock tables."""
    return DynamoDBManager(EVENTS_TABLE, CAPTURES_TABLE)


@pytest.fixture
def table_env(monkeypatch):
    """Point the sync function at the mock events table."""
    monkeypatch.setenv('EVENTS_TABLE_NAME', EVENTS_TABLE)
    monkeypatch.setenv('LOG_LEVEL', 'INFO')


def make_candidate(n: int, **overrides) -> EventCandidate:
    start = datetime(2024, 1, 15, 9, 0, tzinfo=timezone.utc) + timedelta(days=n)
    fields = dict(
        title=f'Test Event {n}',
        description=f'Description {n}',
        event_date=to_timestamp(start),
        venue=f'Venue {n}',
        original_url=f'https://example.com/events/{n}',
        source='test',
        category='Music',
    )
    fields.update(overrides)
    return EventCandidate(**fields)


def make_event(event_id: str, title: str, **overrides) -> Event:
    fields = dict(
        id=event_id,
        title=title,
        description='',
        event_date=datetime(2024, 1, 15, 9, 0, tzinfo=timezone.utc),
        venue='',
        original_url=f'https://example.com/{event_id}',
        source='test',
    )
    fields.update(overrides)
    return Event(**fields)
