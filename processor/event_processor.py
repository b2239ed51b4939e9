"""Event processor for validating and normalizing scraped candidates."""
import logging
from dataclasses import replace
from typing import List, Optional

from processor.models import CATEGORIES, ALL_CATEGORIES, EventCandidate, parse_timestamp, to_timestamp

logger = logging.getLogger(__name__)


class EventProcessor:
    """Processor for validating and normalizing event candidates."""

    MAX_TITLE_LENGTH = 200
    MAX_DESCRIPTION_LENGTH = 2000

    def process_events(self, candidates: List[EventCandidate]) -> List[EventCandidate]:
        """
        Process and validate scraped candidates.

        Args:
            candidates: List of EventCandidate objects from a scraper

        Returns:
            List of validated, normalized EventCandidate objects
        """
        processed_events = []

        for candidate in candidates:
            try:
                processed_event = self._process_single_event(candidate)
                if processed_event:
                    processed_events.append(processed_event)
            except Exception as e:
                logger.warning(
                    f"Failed to process event '{candidate.title}': {e}"
                )
                continue

        logger.info(
            f"Processed {len(processed_events)} valid events out of "
            f"{len(candidates)} total events"
        )
        return processed_events

    def _process_single_event(self, candidate: EventCandidate) -> Optional[EventCandidate]:
        """
        Process a single candidate.

        Args:
            candidate: Raw EventCandidate object

        Returns:
            Normalized EventCandidate or None if validation fails
        """
        if not self._validate_required_fields(candidate):
            return None

        event_date = self._normalize_timestamp(candidate.event_date)
        if not event_date:
            logger.warning(
                f"Invalid event_date for event '{candidate.title}': "
                f"{candidate.event_date}"
            )
            return None

        event_end_date = None
        if candidate.event_end_date:
            event_end_date = self._normalize_timestamp(candidate.event_end_date)
            if not event_end_date:
                logger.warning(
                    f"Dropping invalid event_end_date for event "
                    f"'{candidate.title}': {candidate.event_end_date}"
                )

        category = candidate.category
        if category and (category not in CATEGORIES or category == ALL_CATEGORIES):
            logger.warning(
                f"Unknown category for event '{candidate.title}': {category}"
            )
            category = None

        return replace(
            candidate,
            title=candidate.title.strip()[:self.MAX_TITLE_LENGTH],
            description=(candidate.description or '')[:self.MAX_DESCRIPTION_LENGTH],
            venue=candidate.venue or '',
            original_url=candidate.original_url.strip(),
            event_date=event_date,
            event_end_date=event_end_date,
            category=category or None,
        )

    def _validate_required_fields(self, candidate: EventCandidate) -> bool:
        """
        Validate that required fields are present and non-empty.

        Args:
            candidate: EventCandidate object to validate

        Returns:
            True if valid, False otherwise
        """
        if not candidate.title or not candidate.title.strip():
            logger.warning("Event missing required field: title")
            return False

        if not candidate.event_date or not candidate.event_date.strip():
            logger.warning(
                f"Event '{candidate.title}' missing required field: event_date"
            )
            return False

        if not candidate.original_url or not candidate.original_url.strip():
            logger.warning(
                f"Event '{candidate.title}' missing required field: original_url"
            )
            return False

        return True

    def _normalize_timestamp(self, value: str) -> Optional[str]:
        """
        Normalize a timestamp to the stored ISO 8601 UTC form.

        Args:
            value: ISO 8601 timestamp, with or without offset

        Returns:
            Normalized timestamp string or None if parsing fails
        """
        try:
            return to_timestamp(parse_timestamp(value))
        except ValueError:
            return None
