"""DynamoDB manager for event and email capture storage."""
import logging
import uuid
from dataclasses import asdict
from datetime import datetime, timezone
from typing import List, Optional

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from processor.models import EmailCapture, Event, EventCandidate, SyncResult, parse_timestamp, to_timestamp

logger = logging.getLogger(__name__)


class DynamoDBManager:
    """Manager for DynamoDB operations on the events and email_captures tables."""

    ORIGINAL_URL_INDEX = 'original_url-index'

    # Candidate fields written on insert and refreshed on update
    CANDIDATE_FIELDS = [
        'title', 'description', 'event_date', 'event_end_date', 'venue',
        'address', 'image_url', 'original_url', 'ticket_url', 'price',
        'category', 'source',
    ]

    def __init__(
        self,
        table_name: str = 'events',
        captures_table_name: str = 'email_captures',
        endpoint_url: Optional[str] = None
    ):
        """
        Initialize DynamoDB resource and table references.

        Args:
            table_name: Name of the events table
            captures_table_name: Name of the email captures table
            endpoint_url: Optional endpoint override (e.g. DynamoDB Local)
        """
        self.table_name = table_name
        self.captures_table_name = captures_table_name
        self.dynamodb = boto3.resource('dynamodb', endpoint_url=endpoint_url)
        self.table = self.dynamodb.Table(table_name)
        self.captures_table = self.dynamodb.Table(captures_table_name)
        logger.info(f"Initialized DynamoDBManager for table: {table_name}")

    def has_any_event(self) -> bool:
        """
        Check whether the events table holds at least one row.

        Returns:
            True if any event row exists
        """
        try:
            response = self.table.scan(
                ProjectionExpression='#id',
                ExpressionAttributeNames={'#id': 'id'},
                Limit=1
            )
        except ClientError as e:
            logger.error(f"Error probing DynamoDB table: {e}")
            raise
        return bool(response.get('Items'))

    def get_active_events(self) -> List[Event]:
        """
        Retrieve all active events ordered by event_date ascending.

        Returns:
            List of Event objects
        """
        logger.info("Scanning DynamoDB table for active events")
        scan_kwargs = {'FilterExpression': Attr('is_active').eq(True)}

        try:
            response = self.table.scan(**scan_kwargs)
            items = response.get('Items', [])

            # Handle pagination
            while 'LastEvaluatedKey' in response:
                response = self.table.scan(
                    ExclusiveStartKey=response['LastEvaluatedKey'],
                    **scan_kwargs
                )
                items.extend(response.get('Items', []))
        except ClientError as e:
            logger.error(f"Error scanning DynamoDB table: {e}")
            raise

        events = [e for e in (self._item_to_event(item) for item in items) if e]
        events.sort(key=lambda event: event.event_date)

        logger.info(f"Retrieved {len(events)} active events from DynamoDB")
        return events

    def find_event_by_original_url(self, original_url: str) -> Optional[dict]:
        """
        Look up an existing row by its natural key.

        Args:
            original_url: Source URL of the event

        Returns:
            The stored item, or None
        """
        response = self.table.query(
            IndexName=self.ORIGINAL_URL_INDEX,
            KeyConditionExpression=Key('original_url').eq(original_url),
            Limit=1
        )
        items = response.get('Items', [])
        return items[0] if items else None

    def upsert_events(self, candidates: List[EventCandidate]) -> SyncResult:
        """
        Insert or update candidates, matching on original_url.

        Per-candidate failures are recorded in the result and do not stop
        the run.

        Args:
            candidates: Validated candidates

        Returns:
            SyncResult with inserted/updated counts
        """
        logger.info(f"Starting upsert of {len(candidates)} events")
        result = SyncResult()

        for candidate in candidates:
            try:
                existing = self.find_event_by_original_url(candidate.original_url)
                if existing:
                    self.update_event(existing['id'], candidate)
                    result.updated += 1
                elif self.insert_event(candidate):
                    result.inserted += 1
                else:
                    result.updated += 1
            except ClientError as e:
                error_msg = f"Error upserting '{candidate.original_url}': {e}"
                logger.error(error_msg)
                result.errors.append(error_msg)

        logger.info(
            f"Upsert complete: {result.inserted} inserted, {result.updated} updated, "
            f"{len(result.errors)} errors"
        )
        return result

    def insert_event(self, candidate: EventCandidate) -> bool:
        """
        Insert a new event row keyed by a UUID derived from original_url.

        A concurrent sync that inserted the same URL first makes the put
        fail its condition; the row is then updated instead.

        Args:
            candidate: Candidate to insert

        Returns:
            True if a new row was created, False if it was updated instead
        """
        event_id = self.event_id_for(candidate.original_url)
        now = to_timestamp(datetime.now(timezone.utc))
        item = self._candidate_to_item(candidate)
        item.update({
            'id': event_id,
            'is_active': True,
            'created_at': now,
            'updated_at': now,
        })

        try:
            self.table.put_item(
                Item=item,
                ConditionExpression='attribute_not_exists(#id)',
                ExpressionAttributeNames={'#id': 'id'}
            )
            return True
        except ClientError as e:
            if e.response['Error']['Code'] != 'ConditionalCheckFailedException':
                raise
            logger.warning(
                f"Event '{candidate.original_url}' inserted concurrently, updating instead"
            )
            self.update_event(event_id, candidate)
            return False

    def update_event(self, event_id: str, candidate: EventCandidate) -> None:
        """
        Refresh the candidate fields of an existing row in place.

        is_active and created_at are left untouched.

        Args:
            event_id: Id of the stored row
            candidate: Fresh candidate data
        """
        item = self._candidate_to_item(candidate)
        item['updated_at'] = to_timestamp(datetime.now(timezone.utc))

        names = {}
        values = {}
        assignments = []
        for i, (attr, value) in enumerate(item.items()):
            names[f'#f{i}'] = attr
            values[f':v{i}'] = value
            assignments.append(f'#f{i} = :v{i}')

        self.table.update_item(
            Key={'id': event_id},
            UpdateExpression='SET ' + ', '.join(assignments),
            ExpressionAttributeNames=names,
            ExpressionAttributeValues=values
        )

    def insert_email_capture(self, email: str, event_id: str) -> EmailCapture:
        """
        Persist a lead captured from the ticket modal.

        Args:
            email: Address entered by the user
            event_id: Id of the event the user wants tickets for

        Returns:
            The stored EmailCapture
        """
        capture = EmailCapture(
            id=str(uuid.uuid4()),
            email=email,
            event_id=event_id,
            created_at=to_timestamp(datetime.now(timezone.utc))
        )
        try:
            self.captures_table.put_item(Item=asdict(capture))
        except ClientError as e:
            logger.error(f"Error saving email capture for event {event_id}: {e}")
            raise
        logger.info(f"Saved email capture {capture.id} for event {event_id}")
        return capture

    @staticmethod
    def event_id_for(original_url: str) -> str:
        return str(uuid.uuid5(uuid.NAMESPACE_URL, original_url))

    def _candidate_to_item(self, candidate: EventCandidate) -> dict:
        """
        Convert EventCandidate to DynamoDB attributes.

        Optional fields are only written when present.
        """
        item = {}
        for attr in self.CANDIDATE_FIELDS:
            value = getattr(candidate, attr)
            if value is not None:
                item[attr] = value
        return item

    def _item_to_event(self, item: dict) -> Optional[Event]:
        """
        Convert DynamoDB item to Event object.

        Args:
            item: DynamoDB item dictionary

        Returns:
            Event object or None if conversion fails
        """
        try:
            return Event(
                id=item['id'],
                title=item['title'],
                description=item.get('description', ''),
                event_date=parse_timestamp(item['event_date']),
                event_end_date=(
                    parse_timestamp(item['event_end_date'])
                    if item.get('event_end_date') else None
                ),
                venue=item.get('venue', ''),
                address=item.get('address'),
                image_url=item.get('image_url'),
                original_url=item['original_url'],
                ticket_url=item.get('ticket_url'),
                price=item.get('price'),
                category=item.get('category'),
                source=item.get('source', ''),
                is_active=bool(item.get('is_active', True)),
                created_at=parse_timestamp(item['created_at']) if item.get('created_at') else None,
                updated_at=parse_timestamp(item['updated_at']) if item.get('updated_at') else None
            )
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Failed to convert item to Event: {e}")
            return None
