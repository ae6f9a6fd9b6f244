import io
import json

import pytest
from PIL import Image

import server

AD_ARGUMENTS = {
    "short_hook": "Tanah Strategis BSD - Investasi Menguntungkan!",
    "ad_copy": "Tanah premium di BSD, 200m2. Harga spesial.",
    "narration": "Halo! Saya mau tawarkan tanah istimewa di BSD.",
    "full_script": "[Opening]\nHalo!\n\n[Main Content]\nTanah premium.\n\n[Closing]\nHubungi saya.",
    "key_points": ["Dekat tol", "Lokasi strategis", "Harga kompetitif", "Sertifikat SHM"],
    "cta": "Hubungi sekarang via WhatsApp!",
}


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload or {})

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


def tool_call_payload(arguments):
    return {
        "choices": [
            {
                "message": {
                    "role": "assistant",
                    "tool_calls": [
                        {
                            "type": "function",
                            "function": {
                                "name": "generate_property_ad",
                                "arguments": arguments,
                            },
                        }
                    ],
                }
            }
        ]
    }


@pytest.fixture
def fake_gateway(monkeypatch):
    """requests.post 대체. 응답을 지정하고 호출 내역을 기록."""

    class Gateway:
        def __init__(self):
            self.response = FakeResponse(200, tool_call_payload(json.dumps(AD_ARGUMENTS)))
            self.calls = []

        def post(self, url, **kwargs):
            self.calls.append({"url": url, **kwargs})
            if isinstance(self.response, Exception):
                raise self.response
            return self.response

    gateway = Gateway()
    monkeypatch.setattr("generator.requests.post", gateway.post)
    return gateway


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("LOVABLE_API_KEY", "test-key")
    return "test-key"


@pytest.fixture
def client():
    server.app.config["TESTING"] = True
    with server.app.test_client() as c:
        yield c


@pytest.fixture
def property_payload():
    return {
        "price": "500,000,000",
        "size": "200m2",
        "location": "Tangerang Selatan, dekat BSD City",
        "sellingPoints": "dekat sekolah, akses toll",
    }


@pytest.fixture
def png_bytes():
    buf = io.BytesIO()
    Image.new("RGB", (1200, 600), (40, 120, 200)).save(buf, format="PNG")
    return buf.getvalue()
