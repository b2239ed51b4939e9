"""Web client configuration read from the environment."""
import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class ClientConfig:
    events_table_name: str = 'events'
    captures_table_name: str = 'email_captures'
    store_endpoint_url: Optional[str] = None
    sync_function_url: str = 'http://localhost:5000/functions/v1/scrape-events'
    sync_api_token: str = ''
    sync_timeout_seconds: int = 30
    display_timezone: str = 'Australia/Sydney'
    log_level: str = 'INFO'

    @classmethod
    def from_env(cls) -> 'ClientConfig':
        defaults = cls()
        return cls(
            events_table_name=os.environ.get('EVENTS_TABLE_NAME', defaults.events_table_name),
            captures_table_name=os.environ.get('CAPTURES_TABLE_NAME', defaults.captures_table_name),
            store_endpoint_url=os.environ.get('STORE_ENDPOINT_URL') or None,
            sync_function_url=os.environ.get('SYNC_FUNCTION_URL', defaults.sync_function_url),
            sync_api_token=os.environ.get('SYNC_API_TOKEN', defaults.sync_api_token),
            sync_timeout_seconds=int(os.environ.get('SYNC_TIMEOUT_SECONDS', defaults.sync_timeout_seconds)),
            display_timezone=os.environ.get('DISPLAY_TIMEZONE', defaults.display_timezone),
            log_level=os.environ.get('LOG_LEVEL', defaults.log_level),
        )
