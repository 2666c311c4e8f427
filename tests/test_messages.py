import pytest

from sendly import Message, MessageList, ValidationError

from conftest import make_response, sent_json, sent_method, sent_params, sent_url

BASE = "https://sendly.live/api/v1"


def message_data(message_id="msg_1", **fields):
    data = {
        "id": message_id,
        "to": "+15551234567",
        "text": "Hello",
        "status": "queued",
        "segments": 1,
        "credits_used": 1,
        "created_at": "2025-01-15T10:30:00Z",
    }
    data.update(fields)
    return data


def page(messages, has_more, limit=2, offset=0):
    return make_response(200, {
        "data": messages,
        "pagination": {"total": 3, "limit": limit, "offset": offset, "has_more": has_more},
    })


# ==================== Validation ====================

@pytest.mark.parametrize("phone", ["+15551234567", "+447911123456", "+12"])
def test_send_accepts_e164_numbers(client, transport, phone):
    transport.return_value = make_response(200, {"message": message_data(to=phone)})
    assert client.messages.send(phone, "Hello").to == phone


@pytest.mark.parametrize("phone", [
    "1234567890",
    "+01234567890",
    "+1",
    "+1234567890123456",
    "+1555-123-4567",
    "",
    "+15551234567\n",
])
def test_send_rejects_invalid_numbers(client, transport, phone):
    with pytest.raises(ValidationError, match="Invalid phone number format"):
        client.messages.send(phone, "Hello")

    transport.assert_not_called()


def test_send_rejects_empty_text(client, transport):
    with pytest.raises(ValidationError, match="Message text is required") as exc_info:
        client.messages.send("+15551234567", "")

    assert exc_info.value.local is True
    transport.assert_not_called()


def test_text_length_limit(client, transport):
    with pytest.raises(ValidationError, match="exceeds maximum length"):
        client.messages.send("+15551234567", "a" * 1601)
    transport.assert_not_called()

    transport.return_value = make_response(200, {"message": message_data()})
    client.messages.send("+15551234567", "a" * 1600)
    assert transport.call_count == 1


def test_text_length_counts_characters(client, transport):
    transport.return_value = make_response(200, {"message": message_data()})
    client.messages.send("+15551234567", "é" * 1600)
    assert transport.call_count == 1


def test_send_rejects_unknown_message_type(client, transport):
    with pytest.raises(ValidationError, match="Invalid message type: 'promo'"):
        client.messages.send("+15551234567", "Hello", message_type="promo")

    transport.assert_not_called()


@pytest.mark.parametrize("method, args, message", [
    ("get", [""], "Message ID is required"),
    ("get_scheduled", [""], "Scheduled message ID is required"),
    ("cancel_scheduled", [""], "Scheduled message ID is required"),
    ("get_batch", [""], "Batch ID is required"),
])
def test_id_lookups_require_id(client, transport, method, args, message):
    with pytest.raises(ValidationError, match=message):
        getattr(client.messages, method)(*args)

    transport.assert_not_called()


# ==================== Send / get / list ====================

def test_send_builds_request(client, transport):
    transport.return_value = make_response(200, {"message": message_data(status="queued")})

    message = client.messages.send(
        "+15551234567", "Hello", message_type="transactional",
        metadata={"order": 42}, media_urls=["https://example.com/a.png"],
    )

    assert isinstance(message, Message)
    assert message.id == "msg_1"
    assert message.is_pending()
    assert sent_method(transport) == "POST"
    assert sent_url(transport) == f"{BASE}/messages"
    assert sent_json(transport) == {
        "to": "+15551234567",
        "text": "Hello",
        "messageType": "transactional",
        "metadata": {"order": 42},
        "mediaUrls": ["https://example.com/a.png"],
    }


def test_send_omits_unset_options(client, transport):
    transport.return_value = make_response(200, {"data": message_data()})

    client.messages.send("+15551234567", "Hello")

    assert sent_json(transport) == {"to": "+15551234567", "text": "Hello"}


def test_get_message(client, transport):
    transport.return_value = make_response(200, message_data("msg_9", status="delivered"))

    message = client.messages.get("msg_9")

    assert message.id == "msg_9"
    assert message.is_delivered()
    assert sent_url(transport) == f"{BASE}/messages/msg_9"


def test_list_clamps_limit(client, transport):
    transport.return_value = page([message_data()], has_more=False)

    result = client.messages.list(limit=500, status="delivered")

    assert isinstance(result, MessageList)
    assert len(result) == 1
    assert sent_params(transport) == {"limit": 100, "offset": 0, "status": "delivered"}


def test_list_defaults(client, transport):
    transport.return_value = make_response(200, {"data": []})

    result = client.messages.list()

    assert result.is_empty()
    assert result.limit == 20
    assert result.has_more is False
    assert sent_params(transport) == {"limit": 20, "offset": 0}


# ==================== Pagination ====================

def test_each_walks_pages_in_order(client, transport):
    transport.side_effect = [
        page([message_data("msg_1"), message_data("msg_2")], has_more=True),
        page([message_data("msg_3")], has_more=False, offset=2),
    ]

    ids = [message.id for message in client.messages.each(batch_size=2)]

    assert ids == ["msg_1", "msg_2", "msg_3"]
    assert transport.call_count == 2
    assert sent_params(transport, 0) == {"limit": 2, "offset": 0}
    assert sent_params(transport, 1) == {"limit": 2, "offset": 2}


def test_each_stops_on_short_page(client, transport):
    transport.side_effect = [page([message_data("msg_1")], has_more=True)]

    assert [m.id for m in client.messages.each(batch_size=2)] == ["msg_1"]
    assert transport.call_count == 1


def test_each_is_lazy_and_restartable(client, transport):
    transport.side_effect = lambda *args, **kwargs: page([message_data("msg_1")], has_more=False)

    iterator = client.messages.each(status="sent")
    transport.assert_not_called()

    assert [m.id for m in iterator] == ["msg_1"]
    assert [m.id for m in client.messages.each(status="sent")] == ["msg_1"]
    assert transport.call_count == 2
    assert sent_params(transport) == {"limit": 100, "offset": 0, "status": "sent"}


# ==================== Scheduling ====================

def test_schedule(client, transport):
    transport.return_value = make_response(200, {"id": "sched_1", "status": "scheduled"})

    result = client.messages.schedule(
        "+15551234567", "Later", "2030-01-01T09:00:00Z", from_="Sendly",
    )

    assert result["id"] == "sched_1"
    assert sent_url(transport) == f"{BASE}/messages/schedule"
    assert sent_json(transport) == {
        "to": "+15551234567",
        "text": "Later",
        "scheduledAt": "2030-01-01T09:00:00Z",
        "from": "Sendly",
    }


def test_schedule_requires_time(client, transport):
    with pytest.raises(ValidationError, match="Scheduled time is required"):
        client.messages.schedule("+15551234567", "Later", "")

    transport.assert_not_called()


def test_scheduled_lookups(client, transport):
    client.messages.list_scheduled(limit=5, status="scheduled")
    assert sent_url(transport) == f"{BASE}/messages/scheduled"
    assert sent_params(transport) == {"limit": 5, "offset": 0, "status": "scheduled"}

    client.messages.get_scheduled("sched_1")
    assert sent_url(transport) == f"{BASE}/messages/scheduled/sched_1"

    client.messages.cancel_scheduled("sched_1")
    assert sent_method(transport) == "DELETE"
    assert sent_url(transport) == f"{BASE}/messages/scheduled/sched_1"


# ==================== Batches ====================

def test_send_batch(client, transport):
    transport.return_value = make_response(200, {"batchId": "batch_1", "total": 2})
    messages = [
        {"to": "+15551234567", "text": "One"},
        {"to": "+15557654321", "text": "Two"},
    ]

    result = client.messages.send_batch(messages, from_="Sendly", message_type="marketing")

    assert result["batchId"] == "batch_1"
    assert sent_url(transport) == f"{BASE}/messages/batch"
    assert sent_json(transport) == {"messages": messages, "from": "Sendly", "messageType": "marketing"}


def test_send_batch_rejects_empty(client, transport):
    with pytest.raises(ValidationError, match="cannot be empty"):
        client.messages.send_batch([])

    transport.assert_not_called()


def test_send_batch_reports_index_of_incomplete_item(client, transport):
    messages = [{"to": "+15551234567", "text": "One"}, {"to": "+15557654321"}]

    with pytest.raises(ValidationError, match="Message at index 1 must have 'to' and 'text' fields"):
        client.messages.send_batch(messages)

    transport.assert_not_called()


@pytest.mark.parametrize("messages, index", [
    ([{"to": None, "text": "hi"}], 0),
    ([{"to": "+15551234567", "text": "One"}, {"to": "+15557654321", "text": None}], 1),
    ([{"to": "+15551234567", "text": "One"}, "+15557654321"], 1),
])
def test_send_batch_treats_null_fields_as_missing(client, transport, messages, index):
    with pytest.raises(ValidationError, match=f"Message at index {index} must have 'to' and 'text' fields"):
        client.messages.send_batch(messages)

    transport.assert_not_called()


def test_send_batch_validates_each_item(client, transport):
    with pytest.raises(ValidationError, match="Invalid phone number format"):
        client.messages.send_batch([{"to": "5551234567", "text": "One"}])

    with pytest.raises(ValidationError, match="Message text is required"):
        client.messages.send_batch([{"to": "+15551234567", "text": ""}])

    transport.assert_not_called()


def test_batch_lookups_and_preview(client, transport):
    client.messages.get_batch("batch_1")
    assert sent_url(transport) == f"{BASE}/messages/batch/batch_1"

    client.messages.list_batches()
    assert sent_url(transport) == f"{BASE}/messages/batches"

    client.messages.preview_batch([{"to": "+15551234567", "text": "One"}])
    assert sent_url(transport) == f"{BASE}/messages/batch/preview"
    assert sent_json(transport) == {"messages": [{"to": "+15551234567", "text": "One"}]}
