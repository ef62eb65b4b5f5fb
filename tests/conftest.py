import httpx
import pytest

from config import Settings
from gemini_client import GeminiClient

# PNG 1x1 minimal
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000100e221bc330000000049454e44ae426082"
)


def gemini_reply(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class FakeGemini:
    """Faux endpoint generateContent : rejoue des réponses dans l'ordre."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        reply = self.responses.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, httpx.Response):
            return reply
        return httpx.Response(200, json=reply)

    def client(self, settings):
        return GeminiClient(settings, transport=httpx.MockTransport(self))


@pytest.fixture
def settings():
    return Settings(api_key="test-key", timeout=5.0)
