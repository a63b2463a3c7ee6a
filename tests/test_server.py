import asyncio
import json
import time
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from conftest import FakeRepository
from modules.planning.itinerary_builder import ItineraryBuilder
from modules.tool_usage.email_tool import EmailTool
from modules.tool_usage.payment_tool import StripeCheckoutTool, sign_payload
from modules.tool_usage.photo_tool import PhotoTool
from modules.tool_usage.text_tool import TextGenerator
from schemas.result import Result
from server import create_app

FORM = {
    "city": "Barcelona",
    "audience": "couple",
    "interests": ["romantic"],
    "date": "2025-09-19",
    "budget": "150",
}


# Helpers
def make_builder(pool):
    return ItineraryBuilder(
        repository=FakeRepository(pool),
        text_generator=TextGenerator(None),
        strict=False,
    )


def on_event_loop() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


class RecordingPayment:
    def __init__(self):
        self.on_loop = None

    def create_session(self, params):
        self.on_loop = on_event_loop()
        return Result.success("https://checkout.test/cs_1")


class RecordingEmail:
    def __init__(self):
        self.on_loop = None

    def send_itinerary(self, to, itinerary, city):
        self.on_loop = on_event_loop()
        return Result.success("msg_1")


@pytest.fixture
def client(golden_pool):
    payment = StripeCheckoutTool(secret_key="", price_id="", webhook_secret="whsec_test")
    app = create_app(
        builder=make_builder(golden_pool),
        payment=payment,
        email=EmailTool(api_key=""),
        photos=PhotoTool(api_key=""),
    )
    return TestClient(app)


def test_health(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "Itinerary service is running"}


def test_generate_itinerary(client):
    response = client.post("/api/generate-itinerary", json=FORM)
    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "Romantic escapes in Barcelona"
    assert data["budget"]["total_cost"] == 120
    assert data["budget"]["within_budget"] is True
    assert [i["time"] for i in data["items"]] == ["08:00", "11:00", "13:00", "16:00", "20:00", "21:30"]
    assert data["meta"]["audience"] == "couple"


def test_generate_itinerary_missing_fields(client):
    response = client.post("/api/generate-itinerary", json={"audience": "couple"})
    assert response.status_code == 400
    assert response.json()["missing"] == ["city", "interests", "date"]


def test_generate_itinerary_bad_date(client):
    response = client.post("/api/generate-itinerary", json={**FORM, "date": "tomorrow"})
    assert response.status_code == 400
    assert response.json()["invalid"] == ["date"]


def test_generate_preview(client):
    response = client.post("/api/generate-preview", json=FORM)
    assert response.status_code == 200
    assert set(response.json()) == {"title", "subtitle"}


def test_checkout_unavailable_without_keys(client):
    response = client.post("/api/create-checkout-session", json={"formData": FORM})
    assert response.status_code == 503


def test_webhook_signed(client):
    body = json.dumps({"type": "checkout.session.completed",
                       "data": {"object": {"id": "cs_1", "metadata": {"city": "Barcelona"}}}}).encode()
    header = sign_payload(body, "whsec_test", int(time.time()))
    response = client.post("/api/pay/webhook", content=body, headers={"stripe-signature": header})
    assert response.status_code == 200
    assert response.json() == {"received": True}


def test_webhook_bad_signature(client):
    body = b'{"type": "checkout.session.completed"}'
    response = client.post("/api/pay/webhook", content=body,
                           headers={"stripe-signature": f"t={int(time.time())},v1=00"})
    assert response.status_code == 400


def test_send_email_mock(client):
    itinerary = client.post("/api/generate-itinerary", json=FORM).json()
    response = client.post("/api/send-email",
                           json={"email": "a@example.com", "itinerary": itinerary, "formData": FORM})
    assert response.status_code == 200
    assert response.json()["success"] is True
    assert response.json()["messageId"].startswith("mock_email_")


def test_send_email_missing_fields(client):
    response = client.post("/api/send-email", json={"email": "a@example.com"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Missing required fields"


def test_non_finite_budget_uses_default(client):
    body = '{"city": "Barcelona", "audience": "couple", "interests": ["romantic"], ' \
           '"date": "2025-09-19", "budget": 1e999}'
    response = client.post("/api/generate-itinerary", content=body,
                           headers={"content-type": "application/json"})
    assert response.status_code == 200
    assert response.json()["meta"]["budget"] == 100


def test_checkout_and_email_run_off_the_event_loop(golden_pool):
    payment, email = RecordingPayment(), RecordingEmail()
    app = create_app(builder=make_builder(golden_pool), payment=payment, email=email,
                     photos=PhotoTool(api_key=""))
    client = TestClient(app)

    response = client.post("/api/create-checkout-session", json={"formData": FORM})
    assert response.status_code == 200
    assert response.json() == {"url": "https://checkout.test/cs_1"}
    assert payment.on_loop is False

    response = client.post("/api/send-email",
                           json={"email": "a@example.com", "itinerary": {"title": "x"}, "formData": FORM})
    assert response.status_code == 200
    assert response.json() == {"success": True, "messageId": "msg_1"}
    assert email.on_loop is False


def test_items_carry_photos(client):
    data = client.post("/api/generate-itinerary", json=FORM).json()
    first = data["items"][0]
    assert first["photos"]
    assert first["photos"][0]["source"] == "unsplash"


def test_photo_proxy(golden_pool):
    session = Mock()
    response = Mock()
    response.content = b"\xff\xd8jpeg"
    response.headers = {"content-type": "image/jpeg"}
    response.raise_for_status.return_value = None
    session.get.return_value = response
    photos = PhotoTool(api_key="k", api_url="https://photos.test", session=session)
    client = TestClient(create_app(builder=make_builder(golden_pool),
                                   email=EmailTool(api_key=""), photos=photos))

    result = client.get("/api/photos/google-places/ref_a?maxwidth=400")
    assert result.status_code == 200
    assert result.content == b"\xff\xd8jpeg"
    assert result.headers["content-type"] == "image/jpeg"
    assert result.headers["cache-control"] == "public, max-age=86400"
    _, kwargs = session.get.call_args
    assert kwargs["params"]["photoreference"] == "ref_a"
    assert kwargs["params"]["maxwidth"] == 400


def test_photo_proxy_without_key(client):
    response = client.get("/api/photos/google-places/ref_a")
    assert response.status_code == 502
    assert response.json() == {"detail": "Failed to load photo"}
