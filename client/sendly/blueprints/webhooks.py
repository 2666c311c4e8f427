"""
Webhook Blueprint for Sendly

Receives Sendly webhook deliveries, verifies their signature and hands the
parsed event to an application callback.

To register this blueprint in your Flask app:
    from sendly.blueprints import create_webhook_blueprint

    def on_event(event):
        if event.type == "message.delivered":
            ...

    app.register_blueprint(create_webhook_blueprint(secret, on_event))

Endpoints:
    POST /webhooks/sendly - Receive a signed webhook event
"""

import logging
from typing import Callable

from flask import Blueprint, jsonify, request

from ..exceptions import WebhookSignatureError
from ..logging_config import log_security_event
from ..webhooks import SIGNATURE_HEADER, WebhookEvent, parse_event

logger = logging.getLogger(__name__)


def create_webhook_blueprint(secret: str, handler: Callable[[WebhookEvent], None],
                             url_prefix: str = '/webhooks',
                             name: str = 'sendly_webhooks') -> Blueprint:
    """
    Build a blueprint that verifies and dispatches Sendly webhook events.

    Args:
        secret: Webhook secret from the Sendly dashboard
        handler: Called with each verified WebhookEvent
        url_prefix: Mount point of the blueprint
        name: Blueprint name, unique per application

    Returns:
        Blueprint: ready to register on a Flask app
    """
    if not secret:
        raise ValueError("webhook secret is required")

    webhook_bp = Blueprint(name, __name__, url_prefix=url_prefix)

    @webhook_bp.route('/sendly', methods=['POST'])
    def receive_event():
        """Verify and dispatch one webhook delivery"""
        client_ip = request.remote_addr
        payload = request.get_data()
        signature = request.headers.get(SIGNATURE_HEADER, '')

        try:
            event = parse_event(payload, signature, secret)
        except WebhookSignatureError as e:
            log_security_event('webhook_rejected', e.message, client_ip=client_ip)
            return jsonify({"error": e.message}), 401
        except ValueError:
            logger.warning(f"Signed webhook with malformed JSON from {client_ip}")
            return jsonify({"error": "Malformed JSON payload"}), 400

        logger.info(f"Webhook event {event.id} ({event.type}) for message {event.data.message_id}")
        handler(event)

        return jsonify({"status": "ok"})

    return webhook_bp
