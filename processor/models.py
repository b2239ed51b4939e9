"""Data models for event sync and display."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


ALL_CATEGORIES = 'All'

CATEGORIES = [
    ALL_CATEGORIES,
    'Music',
    'Festival',
    'Food & Wine',
    'Comedy',
    'Markets',
    'Adventure',
    'Art',
    'Opera',
    'Entertainment',
    'Sports',
]

PLACEHOLDER_IMAGE_URL = (
    'https://images.pexels.com/photos/1105666/pexels-photo-1105666.jpeg'
    '?auto=compress&cs=tinysrgb&w=1200'
)


def to_timestamp(value: datetime) -> str:
    """Render a datetime in the stored form, e.g. 2024-01-15T09:00:00.000Z."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def parse_timestamp(value: str) -> datetime:
    """Parse a stored ISO 8601 timestamp into an aware UTC datetime."""
    parsed = datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


@dataclass
class EventCandidate:
    """Unsaved event produced by a scraper."""
    title: str
    description: str
    event_date: str
    venue: str
    original_url: str
    source: str
    event_end_date: Optional[str] = None
    address: Optional[str] = None
    image_url: Optional[str] = None
    ticket_url: Optional[str] = None
    price: Optional[str] = None
    category: Optional[str] = None


@dataclass
class Event:
    """Stored event as read back from the events table."""
    id: str
    title: str
    description: str
    event_date: datetime
    venue: str
    original_url: str
    source: str
    is_active: bool = True
    event_end_date: Optional[datetime] = None
    address: Optional[str] = None
    image_url: Optional[str] = None
    ticket_url: Optional[str] = None
    price: Optional[str] = None
    category: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def display_image_url(self) -> str:
        return self.image_url or PLACEHOLDER_IMAGE_URL

    @property
    def redirect_url(self) -> str:
        """Where "get tickets" sends the user."""
        return self.ticket_url or self.original_url


@dataclass
class EmailCapture:
    """Lead captured before redirecting to a ticket page."""
    id: str
    email: str
    event_id: str
    created_at: str


@dataclass
class SyncResult:
    """Result of sync operation."""
    inserted: int = 0
    updated: int = 0
    errors: list[str] = field(default_factory=list)
