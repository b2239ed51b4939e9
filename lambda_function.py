"""AWS Lambda handler for the Sydney events sync function."""
import json
import logging
import os
import time
from typing import Any, Dict, List, Optional

from log_config import setup_logging
from processor.event_processor import EventProcessor
from processor.models import EventCandidate
from scraper.demo_events import DemoEventsScraper
from storage.dynamodb_manager import DynamoDBManager


CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Methods': 'GET, POST, OPTIONS',
    'Access-Control-Allow-Headers': 'Content-Type, Authorization, X-Client-Info, Apikey',
}

# source selector -> scraper class; "all" runs every entry
SCRAPERS = {
    'demo': DemoEventsScraper,
}


def _response(status_code: int, body: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    headers = dict(CORS_HEADERS)
    if body is None:
        return {'statusCode': status_code, 'headers': headers, 'body': ''}
    headers['Content-Type'] = 'application/json'
    return {'statusCode': status_code, 'headers': headers, 'body': json.dumps(body)}


def _request_method(event: Dict[str, Any]) -> str:
    """HTTP method from a REST API proxy event or a Function URL / HTTP API event."""
    method = event.get('httpMethod')
    if not method:
        method = event.get('requestContext', {}).get('http', {}).get('method', 'GET')
    return method.upper()


def _is_authorized(event: Dict[str, Any], token: str) -> bool:
    if not token:
        return True
    headers = {k.lower(): v for k, v in (event.get('headers') or {}).items()}
    return headers.get('authorization') == f'Bearer {token}'


def collect_candidates(source: str) -> List[EventCandidate]:
    """
    Run the scrapers selected by `source`.

    Args:
        source: "all" or a key of SCRAPERS; anything else selects nothing

    Returns:
        Combined list of EventCandidate objects
    """
    if source != 'all' and source not in SCRAPERS:
        logging.getLogger(__name__).warning(f"Unknown source selector: {source}")

    candidates = []
    for name, scraper_class in SCRAPERS.items():
        if source in ('all', name):
            candidates.extend(scraper_class().fetch_events())
    return candidates


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Main Lambda handler function for the events sync.

    Args:
        event: API Gateway / Function URL proxy event
        context: Lambda context object

    Returns:
        Proxy response dict with statusCode, CORS headers and JSON body
    """
    table_name = os.environ.get('EVENTS_TABLE_NAME', 'events')
    endpoint_url = os.environ.get('STORE_ENDPOINT_URL') or None
    api_token = os.environ.get('SYNC_API_TOKEN', '')
    log_level = os.environ.get('LOG_LEVEL', 'INFO')

    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    method = _request_method(event)
    if method == 'OPTIONS':
        return _response(200)

    if not _is_authorized(event, api_token):
        logger.warning("Rejected sync request with missing or invalid bearer token")
        return _response(401, {'success': False, 'error': 'Unauthorized'})

    params = event.get('queryStringParameters') or {}
    source = params.get('source') or 'all'

    start_time = time.time()
    logger.info(
        "Sync execution started",
        extra={'table_name': table_name, 'source': source}
    )

    try:
        processor = EventProcessor()
        dynamodb_manager = DynamoDBManager(table_name=table_name, endpoint_url=endpoint_url)

        candidates = collect_candidates(source)
        logger.info(f"Collected {len(candidates)} candidate events")

        processed_events = processor.process_events(candidates)
        sync_result = dynamodb_manager.upsert_events(processed_events)

        duration = time.time() - start_time
        logger.info(
            "Sync execution completed successfully",
            extra={
                'duration_seconds': round(duration, 2),
                'events_inserted': sync_result.inserted,
                'events_updated': sync_result.updated,
                'errors': sync_result.errors
            }
        )

        return _response(200, {
            'success': True,
            'message': f'Scraped {len(candidates)} events',
            'inserted': sync_result.inserted,
            'updated': sync_result.updated,
            'errors': sync_result.errors
        })

    except Exception as e:
        duration = time.time() - start_time
        logger.error(
            f"Sync execution failed: {str(e)}",
            extra={
                'duration_seconds': round(duration, 2),
                'error_type': type(e).__name__
            },
            exc_info=True
        )
        return _response(500, {'success': False, 'error': str(e) or 'Unknown error'})
