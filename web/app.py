"""Flask front end for browsing Sydney events."""
import logging
import os
import threading
from zoneinfo import ZoneInfo

from flask import Flask, Response, abort, redirect, request

from client.config import ClientConfig
from client.controller import EventsController
from lambda_function import lambda_handler
from log_config import setup_logging
from storage.dynamodb_manager import DynamoDBManager
from web.capture import INVALID_EMAIL_MESSAGE, EmailCaptureModal
from web.views import render_index

logger = logging.getLogger(__name__)


def _modal_for(controller: EventsController) -> EmailCaptureModal:
    event = controller.state.selected_event
    return EmailCaptureModal(event.id, event.title, event.redirect_url, controller.store)


def create_app(controller: EventsController) -> Flask:
    """Build the app around a single controller that owns the page state."""
    app = Flask(__name__)
    tz = ZoneInfo(controller.config.display_timezone)
    # Serialises state transitions; the sync endpoint below stays outside it
    # so a refresh can call back into this process.
    state_lock = threading.Lock()

    @app.get('/')
    def index():
        if not state_lock.acquire(blocking=False):
            # A load or refresh holds the lock: show its progress rather than wait.
            if controller.state.loading or controller.state.refreshing:
                return render_index(controller.state, tz)
            state_lock.acquire()
        try:
            if controller.state.loading:
                controller.load_initial_data()

            if 'q' in request.args:
                controller.set_search_query(request.args['q'])
            if 'category' in request.args:
                try:
                    controller.set_category(request.args['category'])
                except ValueError:
                    abort(400)

            modal = _modal_for(controller) if controller.state.selected_event else None
            return render_index(controller.state, tz, modal=modal)
        finally:
            state_lock.release()

    @app.post('/refresh')
    def refresh():
        with state_lock:
            controller.trigger_scraper()
        return redirect('/')

    @app.get('/events/<event_id>/tickets')
    def get_tickets(event_id):
        with state_lock:
            event = controller.find_event(event_id)
            if event is None:
                abort(404)
            controller.handle_get_tickets(event)
        return redirect('/')

    @app.post('/events/<event_id>/tickets')
    def submit_tickets(event_id):
        with state_lock:
            event = controller.find_event(event_id)
            if event is None:
                abort(404)
            controller.handle_get_tickets(event)

            modal = _modal_for(controller)
            if modal.submit(request.form.get('email', '')):
                controller.close_modal()
                return render_index(controller.state, tz, open_url=event.redirect_url)

            status = 422 if modal.error == INVALID_EMAIL_MESSAGE else 503
            return render_index(controller.state, tz, modal=modal), status

    @app.post('/modal/close')
    def close_modal():
        with state_lock:
            controller.close_modal()
        return redirect('/')

    @app.route('/functions/v1/scrape-events', methods=['GET', 'OPTIONS'])
    def scrape_events():
        """Run the sync function in-process, as the deployed Lambda would."""
        proxy_event = {
            'httpMethod': request.method,
            'queryStringParameters': request.args.to_dict() or None,
            'headers': dict(request.headers),
        }
        result = lambda_handler(proxy_event, None)
        return Response(result['body'], status=result['statusCode'], headers=result['headers'])

    return app


def main() -> None:
    config = ClientConfig.from_env()
    setup_logging(config.log_level)

    store = DynamoDBManager(
        table_name=config.events_table_name,
        captures_table_name=config.captures_table_name,
        endpoint_url=config.store_endpoint_url
    )
    app = create_app(EventsController(store, config))

    host = os.environ.get('HOST', '127.0.0.1')
    port = int(os.environ.get('PORT', '5000'))
    logger.info(f"Serving Sydney events on {host}:{port}")
    app.run(host=host, port=port, threaded=True)


if __name__ == '__main__':
    main()
