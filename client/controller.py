"""Client state and the controller that owns it."""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

import requests
from botocore.exceptions import BotoCoreError, ClientError

from client.config import ClientConfig
from processor.models import ALL_CATEGORIES, CATEGORIES, Event
from storage.dynamodb_manager import DynamoDBManager

logger = logging.getLogger(__name__)

STORE_ERRORS = (ClientError, BotoCoreError)


class SyncError(Exception):
    """The sync function answered with a non-success status."""


def filter_events(events: List[Event], search_query: str, category: str) -> List[Event]:
    """
    Narrow `events` by free text and category.

    A non-empty query keeps events whose title, description or venue
    contains it, ignoring case. Any category other than "All" keeps exact
    matches only. Order is preserved.
    """
    filtered = list(events)

    if search_query:
        query = search_query.lower()
        filtered = [
            event for event in filtered
            if query in (event.title or '').lower()
            or query in (event.description or '').lower()
            or query in (event.venue or '').lower()
        ]

    if category != ALL_CATEGORIES:
        filtered = [event for event in filtered if event.category == category]

    return filtered


@dataclass
class ClientState:
    events: List[Event] = field(default_factory=list)
    loading: bool = True
    refreshing: bool = False
    search_query: str = ''
    selected_category: str = ALL_CATEGORIES
    selected_event: Optional[Event] = None

    @property
    def filtered_events(self) -> List[Event]:
        return filter_events(self.events, self.search_query, self.selected_category)

    @property
    def has_filters(self) -> bool:
        return bool(self.search_query) or self.selected_category != ALL_CATEGORIES


class EventsController:
    """
    Orchestrates the data store and the sync function for the listing page.

    The controller is the only writer of its ClientState; views read it.
    """

    def __init__(
        self,
        store: DynamoDBManager,
        config: ClientConfig,
        session: Optional[requests.Session] = None
    ):
        self.store = store
        self.config = config
        self.session = session or requests.Session()
        self.state = ClientState()

    def load_initial_data(self) -> None:
        """Check for any event, sync when the store is empty, then fetch once."""
        try:
            if not self.store.has_any_event():
                logger.info("Event store is empty, running initial sync")
                self._run_sync()
        except STORE_ERRORS as e:
            logger.error(f"Error loading initial data: {e}")
        self.fetch_events()

    def fetch_events(self) -> None:
        """Replace the event list with the active events from the store."""
        try:
            self.state.events = self.store.get_active_events()
        except STORE_ERRORS as e:
            logger.error(f"Error fetching events: {e}")
        finally:
            self.state.loading = False

    def trigger_scraper(self) -> None:
        """Run the sync function and reload on success."""
        if self._run_sync():
            self.fetch_events()

    def _run_sync(self) -> bool:
        self.state.refreshing = True
        try:
            self._invoke_sync_function()
            return True
        except (SyncError, requests.RequestException) as e:
            logger.error(f"Error triggering scraper: {e}")
            return False
        finally:
            self.state.refreshing = False

    def _invoke_sync_function(self, source: str = 'all') -> dict:
        headers = {
            'Authorization': f'Bearer {self.config.sync_api_token}',
            'Content-Type': 'application/json',
        }
        response = self.session.get(
            self.config.sync_function_url,
            params={'source': source},
            headers=headers,
            timeout=self.config.sync_timeout_seconds
        )
        if not response.ok:
            raise SyncError(f'Failed to scrape events (HTTP {response.status_code})')

        summary = response.json()
        logger.info(
            "Sync function finished",
            extra={'inserted': summary.get('inserted'), 'updated': summary.get('updated')}
        )
        return summary

    def set_search_query(self, search_query: str) -> None:
        self.state.search_query = search_query or ''

    def set_category(self, category: str) -> None:
        if category not in CATEGORIES:
            raise ValueError(f'Unknown category: {category}')
        self.state.selected_category = category

    def find_event(self, event_id: str) -> Optional[Event]:
        for event in self.state.events:
            if event.id == event_id:
                return event
        return None

    def handle_get_tickets(self, event: Event) -> None:
        self.state.selected_event = event

    def close_modal(self) -> None:
        self.state.selected_event = None
