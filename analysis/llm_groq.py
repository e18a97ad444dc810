import json
import logging
import re
import time
from typing import Any, Dict, Optional
import requests

from config import Settings
from errors import ExternalServiceError, SchemaValidationError

logger = logging.getLogger(__name__)

RETRYABLE_STATUS = {429, 500, 502, 503, 504}
_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


class GroqClient:
    """
    Thin adapter over Groq's OpenAI-compatible chat completions endpoint.

    One instance is built at startup and handed to whoever needs it; it keeps
    a requests.Session and the connection settings, nothing per-request.
    complete_json() returns the model's reply decoded as a JSON object.
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        url: str,
        temperature: float = 0.2,
        timeout: float = 60.0,
        max_retries: int = 2,
        retry_backoff: float = 1.0,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.url = url
        self.temperature = temperature
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_backoff = retry_backoff
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings, session: Optional[requests.Session] = None) -> "GroqClient":
        return cls(
            api_key=settings.groq_api_key,
            model=settings.model_name,
            url=settings.groq_api_url,
            temperature=settings.llm_temperature,
            timeout=settings.llm_timeout,
            max_retries=settings.llm_max_retries,
            retry_backoff=settings.llm_retry_backoff,
            session=session,
        )

    def _payload(self, system_prompt: str, user_prompt: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": self.temperature,
            "response_format": {"type": "json_object"},
        }

    def _post(self, payload: Dict[str, Any]) -> requests.Response:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        attempts = self.max_retries + 1
        for attempt in range(1, attempts + 1):
            try:
                response = self.session.post(self.url, headers=headers, json=payload, timeout=self.timeout)
            except requests.exceptions.RequestException as e:
                if attempt < attempts:
                    logger.warning("Groq request failed (attempt %d/%d): %s", attempt, attempts, e)
                    time.sleep(self.retry_backoff * attempt)
                    continue
                raise ExternalServiceError(f"Groq API unreachable: {e}") from e

            if response.status_code in RETRYABLE_STATUS and attempt < attempts:
                logger.warning(
                    "Groq API returned %d (attempt %d/%d), retrying", response.status_code, attempt, attempts
                )
                time.sleep(self.retry_backoff * attempt)
                continue
            if response.status_code >= 400:
                raise ExternalServiceError(
                    f"Groq API error {response.status_code}: {response.text[:300]}"
                )
            return response

        # unreachable: the last attempt either returns or raises
        raise ExternalServiceError("Groq API request was not attempted")

    def complete_json(self, system_prompt: str, user_prompt: str) -> Dict[str, Any]:
        """Send one prompt and return the reply parsed as a JSON object."""
        if not self.api_key:
            raise ExternalServiceError("GROQ_API_KEY is not set")

        response = self._post(self._payload(system_prompt, user_prompt))
        try:
            data = response.json()
            raw = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ExternalServiceError(f"Unexpected Groq API response: {e}") from e

        if isinstance(raw, dict):
            return raw
        if not isinstance(raw, str):
            raise SchemaValidationError(f"Model returned {type(raw).__name__}, expected a JSON object")

        try:
            parsed = json.loads(_FENCE.sub("", raw.strip()))
        except json.JSONDecodeError as e:
            raise SchemaValidationError(f"Model output is not valid JSON: {e}") from e
        if not isinstance(parsed, dict):
            raise SchemaValidationError(f"Model returned {type(parsed).__name__}, expected a JSON object")
        return parsed
