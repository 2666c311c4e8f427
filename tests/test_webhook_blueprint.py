import json
import logging

import pytest
from flask import Flask

from sendly.blueprints import create_webhook_blueprint
from sendly.webhooks import SIGNATURE_HEADER, generate_signature

SECRET = "whsec_test"


@pytest.fixture
def received():
    return []


@pytest.fixture
def app(received):
    app = Flask(__name__)
    app.config['TESTING'] = True
    app.register_blueprint(create_webhook_blueprint(SECRET, received.append))
    return app


@pytest.fixture
def http(app):
    return app.test_client()


def signed_post(http, payload: bytes, secret=SECRET):
    return http.post(
        '/webhooks/sendly',
        data=payload,
        headers={SIGNATURE_HEADER: generate_signature(payload, secret)},
        content_type='application/json',
    )


def event_payload(**overrides):
    event = {
        "id": "evt_1",
        "type": "message.delivered",
        "data": {"message_id": "msg_1", "status": "delivered", "to": "+15551234567"},
        "created_at": "2025-01-15T10:30:00Z",
    }
    event.update(overrides)
    return json.dumps(event).encode("utf-8")


def test_valid_event_is_dispatched(http, received):
    response = signed_post(http, event_payload())

    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}
    assert len(received) == 1
    assert received[0].type == "message.delivered"
    assert received[0].data.message_id == "msg_1"


def test_bad_signature_is_rejected(http, received, caplog):
    with caplog.at_level(logging.WARNING, logger='sendly.security'):
        response = signed_post(http, event_payload(), secret="wrong")

    assert response.status_code == 401
    assert response.get_json() == {"error": "Invalid webhook signature"}
    assert received == []
    assert "event_type=webhook_rejected" in caplog.text


def test_missing_signature_is_rejected(http, received):
    response = http.post('/webhooks/sendly', data=event_payload(), content_type='application/json')

    assert response.status_code == 401
    assert received == []


def test_incomplete_event_is_rejected(http, received):
    payload = json.dumps({"id": "evt_1", "type": "message.sent"}).encode("utf-8")

    response = signed_post(http, payload)

    assert response.status_code == 401
    assert response.get_json() == {"error": "Invalid event structure"}
    assert received == []


def test_malformed_json_returns_400(http, received):
    response = signed_post(http, b"{not json")

    assert response.status_code == 400
    assert response.get_json() == {"error": "Malformed JSON payload"}
    assert received == []


def test_get_is_not_allowed(http):
    assert http.get('/webhooks/sendly').status_code == 405


def test_custom_prefix_and_name(received):
    app = Flask(__name__)
    app.register_blueprint(create_webhook_blueprint(
        SECRET, received.append, url_prefix='/hooks', name='other_hooks'))

    payload = event_payload()
    response = app.test_client().post(
        '/hooks/sendly', data=payload,
        headers={SIGNATURE_HEADER: generate_signature(payload, SECRET)})

    assert response.status_code == 200
    assert 'other_hooks' in app.blueprints


def test_secret_is_required():
    with pytest.raises(ValueError):
        create_webhook_blueprint("", lambda event: None)


def test_non_utf8_body_returns_400(http, received):
    response = signed_post(http, b'{"id": "\xff\xfe"}')

    assert response.status_code == 400
    assert response.get_json() == {"error": "Malformed JSON payload"}
    assert received == []


def test_malformed_counters_are_accepted(http, received):
    payload = event_payload(data={"message_id": "msg_1", "status": "delivered", "segments": {"n": 1}})

    response = signed_post(http, payload)

    assert response.status_code == 200
    assert received[0].data.segments == 1


def test_non_object_data_is_rejected(http, received):
    response = signed_post(http, event_payload(data="delivered"))

    assert response.status_code == 401
    assert response.get_json() == {"error": "Invalid event structure"}
    assert received == []
