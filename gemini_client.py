"""Client HTTP minimal pour l'endpoint `generateContent` de Gemini.

Un appel = une requête POST, sans nouvelle tentative. Les erreurs sont
converties en `RequestFailedError` / `EmptyResponseError`.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from config import Settings
from errors import EmptyResponseError, RequestFailedError

logger = logging.getLogger("farm-scanner.gemini")


def build_payload(parts: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"contents": [{"role": "user", "parts": parts}]}


def extract_text(result: Any) -> str:
    """Retourne le premier texte du premier candidat."""
    if not isinstance(result, dict):
        raise RequestFailedError("Malformed response body")

    candidates = result.get("candidates") or []
    if not candidates:
        raise EmptyResponseError()

    try:
        parts = (candidates[0].get("content") or {}).get("parts") or []
        text = parts[0].get("text") if parts else None
    except (AttributeError, KeyError, TypeError) as e:
        raise RequestFailedError("Malformed response body") from e

    if text is None:
        raise EmptyResponseError()
    if not isinstance(text, str):
        raise RequestFailedError("Malformed response body")
    return text


def clean_text(text: str) -> str:
    # Normalisation cosmétique : le modèle répond souvent en markdown
    return text.replace("*", "").strip()


def _error_detail(response: httpx.Response) -> str:
    try:
        error_data = response.json()
    except ValueError:
        return response.reason_phrase or f"HTTP {response.status_code}"
    message = None
    if isinstance(error_data, dict):
        message = (error_data.get("error") or {}).get("message")
    return message or response.reason_phrase or f"HTTP {response.status_code}"


class GeminiClient:
    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self._transport = transport

    @property
    def url(self) -> str:
        return f"{self.settings.api_base}/models/{self.settings.model}:generateContent"

    async def generate(self, parts: List[Dict[str, Any]]) -> str:
        """Envoie une requête mono-tour et retourne le texte nettoyé."""
        payload = build_payload(parts)
        headers = {"Content-Type": "application/json"}

        try:
            async with httpx.AsyncClient(timeout=self.settings.timeout, transport=self._transport) as client:
                response = await client.post(
                    self.url,
                    params={"key": self.settings.api_key},
                    json=payload,
                    headers=headers,
                )
        except httpx.TimeoutException as e:
            logger.error("Timeout sur %s", self.url)
            raise RequestFailedError("Request timed out") from e
        except httpx.HTTPError as e:
            logger.error("Erreur réseau sur %s: %s", self.url, type(e).__name__)
            raise RequestFailedError(f"Network error: {type(e).__name__}") from e

        logger.info("Gemini %s -> %s", self.settings.model, response.status_code)

        if not response.is_success:
            detail = _error_detail(response)
            logger.error("Gemini API error (%s): %s", response.status_code, detail)
            raise RequestFailedError(detail)

        try:
            result = response.json()
        except ValueError as e:
            raise RequestFailedError("Malformed response body") from e

        text = clean_text(extract_text(result))
        if not text:
            raise EmptyResponseError()
        return text
