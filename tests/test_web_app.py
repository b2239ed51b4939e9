"""End-to-end tests for the Flask front end."""
import json
import threading
from unittest.mock import Mock, patch
from urllib.parse import parse_qsl, urlsplit

import pytest
import responses
from botocore.exceptions import ClientError

from client.config import ClientConfig
from client.controller import EventsController
from conftest import make_event
from lambda_function import lambda_handler
from web.app import create_app

SYNC_URL = 'https://functions.example.com/v1/scrape-events'


def _lambda_callback(request):
    event = {
        'httpMethod': request.method,
        'queryStringParameters': dict(parse_qsl(urlsplit(request.url).query)) or None,
        'headers': dict(request.headers),
    }
    result = lambda_handler(event, None)
    return result['statusCode'], result['headers'], result['body']


@pytest.fixture
def sync_function():
    """Serve the sync endpoint from the real handler."""
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        rsps.add_callback(responses.GET, SYNC_URL, callback=_lambda_callback)
        yield rsps


@pytest.fixture
def controller(store, table_env):
    config = ClientConfig(sync_function_url=SYNC_URL, sync_api_token='anon-key')
    return EventsController(store, config)


@pytest.fixture
def client(controller, sync_function):
    app = create_app(controller)
    app.config['TESTING'] = True
    return app.test_client()


def _event_id(controller, title):
    return next(e.id for e in controller.state.events if e.title == title)


def test_first_visit_syncs_and_lists_events(client, controller, sync_function):
    """Test empty store -> sync -> "Showing 12 events"."""
    response = client.get('/')

    assert response.status_code == 200
    page = response.get_data(as_text=True)
    assert 'Showing <strong>12</strong> events' in page
    assert len(sync_function.calls) == 1


def test_search_opera(client, controller):
    """Test the opera search keeps La Bohème and drops the markets."""
    page = client.get('/?q=opera').get_data(as_text=True)

    assert 'Sydney Opera House: La Bohème' in page
    assert 'Bondi Beach Markets' not in page
    assert controller.state.search_query == 'opera'


def test_category_music(client, controller):
    """Test selecting Music keeps only Music events."""
    page = client.get('/?category=Music&q=').get_data(as_text=True)

    assert 'Showing <strong>2</strong> events' in page
    assert 'Sydney Jazz Festival' in page
    assert 'Taronga Zoo Twilight Concert Series' in page
    assert all(e.category == 'Music' for e in controller.state.filtered_events)


def test_filters_persist_between_requests(client, controller):
    client.get('/?category=Art')

    page = client.get('/').get_data(as_text=True)

    assert 'Showing <strong>2</strong> events' in page
    assert controller.state.selected_category == 'Art'


def test_unknown_category_is_bad_request(client):
    assert client.get('/?category=Knitting').status_code == 400


def test_refresh_resyncs_without_duplicates(client, controller, sync_function):
    client.get('/')

    response = client.post('/refresh')

    assert response.status_code == 302
    assert len(sync_function.calls) == 2
    assert len(controller.state.events) == 12
    assert controller.state.refreshing is False


def test_get_tickets_opens_modal(client, controller):
    client.get('/')
    event_id = _event_id(controller, 'Coastal Comedy Club')

    response = client.get(f'/events/{event_id}/tickets')
    page = client.get('/').get_data(as_text=True)

    assert response.status_code == 302
    assert controller.state.selected_event.id == event_id
    assert 'Get Your Tickets' in page
    assert 'Coastal Comedy Club' in page


def test_get_tickets_unknown_event(client):
    client.get('/')
    assert client.get('/events/missing/tickets').status_code == 404


def test_invalid_email_keeps_modal_open(client, controller, captures_table):
    """Test "x" shows an inline error and writes nothing."""
    client.get('/')
    event_id = _event_id(controller, 'Coastal Comedy Club')
    client.get(f'/events/{event_id}/tickets')

    response = client.post(f'/events/{event_id}/tickets', data={'email': 'x'})

    page = response.get_data(as_text=True)
    assert response.status_code == 422
    assert 'Please enter a valid email address' in page
    assert 'Get Your Tickets' in page
    assert controller.state.selected_event.id == event_id
    assert captures_table.scan()['Items'] == []


def test_valid_email_saves_and_redirects(client, controller, captures_table):
    client.get('/')
    event_id = _event_id(controller, 'Coastal Comedy Club')

    response = client.post(f'/events/{event_id}/tickets', data={'email': 'a@b'})

    page = response.get_data(as_text=True)
    assert response.status_code == 200
    assert "window.open(\"https://www.comedystore.com.au/tickets\", '_blank')" in page
    assert 'Get Your Tickets' not in page
    assert controller.state.selected_event is None
    items = captures_table.scan()['Items']
    assert len(items) == 1
    assert items[0]['email'] == 'a@b'
    assert items[0]['event_id'] == event_id


def test_capture_store_failure_shows_retry(client, controller, captures_table):
    client.get('/')
    event_id = _event_id(controller, 'Bondi Beach Markets')
    error = ClientError({'Error': {'Code': 'InternalServerError', 'Message': 'down'}}, 'PutItem')

    with patch.object(controller.store, 'insert_email_capture', side_effect=error):
        response = client.post(f'/events/{event_id}/tickets', data={'email': 'a@b'})

    page = response.get_data(as_text=True)
    assert response.status_code == 503
    assert 'Failed to save email. Please try again.' in page
    assert controller.state.selected_event.id == event_id


def test_close_modal(client, controller):
    client.get('/')
    event_id = _event_id(controller, 'Bondi Beach Markets')
    client.get(f'/events/{event_id}/tickets')

    response = client.post('/modal/close')

    assert response.status_code == 302
    assert controller.state.selected_event is None
    assert 'Get Your Tickets' not in client.get('/').get_data(as_text=True)


def test_local_sync_endpoint(client, store):
    preflight = client.options('/functions/v1/scrape-events')
    response = client.get('/functions/v1/scrape-events?source=demo')

    assert preflight.status_code == 200
    assert preflight.headers['Access-Control-Allow-Origin'] == '*'
    body = json.loads(response.get_data(as_text=True))
    assert body['success'] is True
    assert body['inserted'] == 12


def _blocking(started, release, result):
    """Side effect that parks the calling request until released."""
    def wait(*args, **kwargs):
        started.set()
        release.wait(5)
        return result
    return wait


def test_visitor_during_first_load_sees_loading_page():
    started, release = threading.Event(), threading.Event()
    store = Mock()
    store.has_any_event.side_effect = _blocking(started, release, True)
    store.get_active_events.return_value = [make_event('1', 'Only')]
    app = create_app(EventsController(store, ClientConfig()))
    first = []
    worker = threading.Thread(target=lambda: first.append(app.test_client().get('/')))

    worker.start()
    assert started.wait(5)
    page = app.test_client().get('/').get_data(as_text=True)
    release.set()
    worker.join(5)

    assert 'Loading events...' in page
    assert 'Only' in first[0].get_data(as_text=True)


def test_visitor_during_refresh_sees_disabled_button():
    started, release = threading.Event(), threading.Event()
    store = Mock()
    store.get_active_events.return_value = [make_event('1', 'Only')]
    controller = EventsController(store, ClientConfig())
    controller.fetch_events()
    app = create_app(controller)

    with patch.object(controller, '_invoke_sync_function',
                      side_effect=_blocking(started, release, {})):
        worker = threading.Thread(target=lambda: app.test_client().post('/refresh'))
        worker.start()
        assert started.wait(5)
        page = app.test_client().get('/').get_data(as_text=True)
        release.set()
        worker.join(5)

    assert 'type="submit" disabled>Refreshing...' in page
    assert 'Only' in page
    assert controller.state.refreshing is False
