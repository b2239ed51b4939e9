"""Email capture shown before sending a user to a ticket page."""
import logging

from botocore.exceptions import BotoCoreError, ClientError

from storage.dynamodb_manager import DynamoDBManager

logger = logging.getLogger(__name__)

INVALID_EMAIL_MESSAGE = 'Please enter a valid email address'
SAVE_FAILED_MESSAGE = 'Failed to save email. Please try again.'


class EmailCaptureModal:
    """Form state for the ticket email modal."""

    def __init__(self, event_id: str, event_title: str, redirect_url: str, store: DynamoDBManager):
        self.event_id = event_id
        self.event_title = event_title
        self.redirect_url = redirect_url
        self.store = store
        self.email = ''
        self.is_submitting = False
        self.error = ''

    def submit(self, email: str) -> bool:
        """
        Validate and store the address.

        Returns:
            True when the capture was saved and the user should be redirected
        """
        self.email = (email or '').strip()
        self.error = ''

        if not self.email or '@' not in self.email:
            self.error = INVALID_EMAIL_MESSAGE
            return False

        self.is_submitting = True
        try:
            self.store.insert_email_capture(self.email, self.event_id)
            return True
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error saving email: {e}")
            self.error = SAVE_FAILED_MESSAGE
            return False
        finally:
            self.is_submitting = False
