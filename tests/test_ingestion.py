"""
Tests for the Gemini and geolocation clients
"""
import asyncio
import base64
import json
import pytest

import httpx

import sys
sys.path.insert(0, '.')

from featherguard.core.exceptions import ClassificationError, GeolocationError
from featherguard.core.geo_utils import Coordinates
from featherguard.ingestion.gemini_client import GeminiClassifier
from featherguard.ingestion.geolocation_client import IPGeolocationClient, StaticPosition


def run(coro):
    return asyncio.run(coro)


def mock_client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def gemini_reply(*texts):
    return {"candidates": [{"content": {"parts": [{"text": t} for t in texts]}}]}


class TestGeminiClassifier:
    """Test suite for the Gemini client."""

    def test_classify(self, sample_photo):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["key"] = request.headers.get("x-goog-api-key")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=gemini_reply("五色鳥 (95%)\n"))

        classifier = GeminiClassifier(api_key="test_key", model="gemini-test", client=mock_client(handler))

        text = run(classifier.classify(sample_photo, "What bird?"))

        assert text == "五色鳥 (95%)\n"
        assert seen["url"].endswith("/models/gemini-test:generateContent")
        assert seen["key"] == "test_key"
        parts = seen["body"]["contents"][0]["parts"]
        assert parts[0] == {"text": "What bird?"}
        assert parts[1]["inline_data"]["mime_type"] == "image/jpeg"
        assert base64.b64decode(parts[1]["inline_data"]["data"]) == sample_photo.data

    def test_multiple_parts_joined(self, sample_photo):
        def handler(request):
            return httpx.Response(200, json=gemini_reply("麻雀 ", "(80%)"))

        classifier = GeminiClassifier(api_key="k", client=mock_client(handler))

        assert run(classifier.classify(sample_photo, "?")) == "麻雀 (80%)"

    def test_without_api_key(self, sample_photo):
        def handler(request):
            raise AssertionError("no request expected")

        classifier = GeminiClassifier(api_key=None, client=mock_client(handler))

        assert classifier.is_configured is False
        with pytest.raises(ClassificationError):
            run(classifier.classify(sample_photo, "?"))

    def test_http_error(self, sample_photo):
        def handler(request):
            return httpx.Response(429, json={"error": {"message": "quota"}})

        classifier = GeminiClassifier(api_key="k", client=mock_client(handler))

        with pytest.raises(ClassificationError):
            run(classifier.classify(sample_photo, "?"))

    def test_timeout(self, sample_photo):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        classifier = GeminiClassifier(api_key="k", client=mock_client(handler))

        with pytest.raises(ClassificationError):
            run(classifier.classify(sample_photo, "?"))

    def test_blocked_prompt(self, sample_photo):
        def handler(request):
            return httpx.Response(200, json={"promptFeedback": {"blockReason": "SAFETY"}})

        classifier = GeminiClassifier(api_key="k", client=mock_client(handler))

        with pytest.raises(ClassificationError, match="SAFETY"):
            run(classifier.classify(sample_photo, "?"))

    @pytest.mark.parametrize("payload", [
        {"candidates": []},
        {"candidates": [{"content": {}}]},
        gemini_reply("   "),
        ["not", "an", "object"],
    ])
    def test_unusable_response(self, sample_photo, payload):
        def handler(request):
            return httpx.Response(200, json=payload)

        classifier = GeminiClassifier(api_key="k", client=mock_client(handler))

        with pytest.raises(ClassificationError):
            run(classifier.classify(sample_photo, "?"))


class TestGeolocation:
    """Test position providers."""

    def test_static_position(self):
        position = run(StaticPosition(25.03, 121.56).get_current_position())
        assert position == Coordinates(25.03, 121.56)

    def test_static_position_out_of_range(self):
        with pytest.raises(GeolocationError):
            run(StaticPosition(-95.0, 121.56).get_current_position())

    def test_ip_lookup(self):
        def handler(request):
            return httpx.Response(200, json={"status": "success", "lat": 25.0478, "lon": 121.5319})

        client = IPGeolocationClient(client=mock_client(handler))

        assert run(client.get_current_position()) == Coordinates(25.0478, 121.5319)

    def test_static_origin_rejected(self):
        with pytest.raises(GeolocationError):
            run(StaticPosition(0.0, 0.0).get_current_position())

    def test_ip_lookup_origin_rejected(self):
        def handler(request):
            return httpx.Response(200, json={"status": "success", "lat": 0, "lon": 0})

        client = IPGeolocationClient(client=mock_client(handler))

        with pytest.raises(GeolocationError):
            run(client.get_current_position())

    def test_ip_lookup_failure_status(self):
        def handler(request):
            return httpx.Response(200, json={"status": "fail", "message": "private range"})

        client = IPGeolocationClient(client=mock_client(handler))

        with pytest.raises(GeolocationError, match="private range"):
            run(client.get_current_position())

    def test_ip_lookup_network_error(self):
        def handler(request):
            raise httpx.ConnectTimeout("timeout", request=request)

        client = IPGeolocationClient(client=mock_client(handler))

        with pytest.raises(GeolocationError):
            run(client.get_current_position())
