import json
from unittest import mock

import pytest
import requests

from sendly import Sendly


def make_response(status_code=200, body=None, headers=None, raw=None):
    """Build a real requests.Response as the transport would return it"""
    response = requests.Response()
    response.status_code = status_code
    if raw is not None:
        response._content = raw
    elif body is not None:
        response._content = json.dumps(body).encode("utf-8")
    else:
        response._content = b""
    response.headers.update(headers or {})
    response.url = "https://sendly.live/api/v1/test"
    return response


@pytest.fixture(autouse=True)
def no_sleep():
    with mock.patch("sendly.api_caller.time.sleep") as sleep:
        yield sleep


@pytest.fixture
def client():
    with Sendly("sk_test_v1_example") as sendly_client:
        yield sendly_client


@pytest.fixture
def transport(client):
    """Replace the session transport. Set .return_value or .side_effect."""
    with mock.patch.object(client.session, "request") as request:
        request.return_value = make_response(200, {})
        yield request


def sent_json(transport, call_index=-1):
    return transport.call_args_list[call_index].kwargs["json"]


def sent_params(transport, call_index=-1):
    return transport.call_args_list[call_index].kwargs["params"]


def sent_url(transport, call_index=-1):
    return transport.call_args_list[call_index].args[1]


def sent_method(transport, call_index=-1):
    return transport.call_args_list[call_index].args[0]
