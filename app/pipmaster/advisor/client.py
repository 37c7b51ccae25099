"""Clients for the hosted text-generation models.

Every client exposes one operation, generate_json(): send a prompt and
return the decoded JSON answer. Two providers are supported:

1. gemini:
   HTTPS call to the Gemini ``generateContent`` endpoint with a JSON
   response schema.

2. claude:
   Headless ``claude -p`` invocation of the Claude Code CLI.

Clients raise the AdvisorError hierarchy; deciding what a failure means
for the dashboard is left to the gateway.
"""

import json
import logging
import re
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import httpx

from pipmaster.advisor.config import AdvisorConfig
from pipmaster.utils.shell import run_command

logger = logging.getLogger(__name__)

GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"

_CODE_FENCE = re.compile(r"^```[a-zA-Z]*\s*\n?(?P<body>.*?)\n?```$", re.DOTALL)


class AdvisorError(Exception):
    """Base exception for failed advisor requests."""


class AdvisorAuthError(AdvisorError):
    """Raised when no API key is available or the key is rejected."""


class AdvisorRequestError(AdvisorError):
    """Raised when the request cannot be completed (network, timeout, HTTP error)."""


class AdvisorResponseError(AdvisorError):
    """Raised when the model's answer cannot be decoded."""


def decode_json_text(text: str | None) -> Any:
    """Decode a JSON answer, tolerating a surrounding Markdown code fence.

    Args:
        text: Raw answer text from the model.

    Returns:
        Decoded JSON value, or None for an empty answer.

    Raises:
        AdvisorResponseError: If the text is not valid JSON.
    """
    if text is None or not text.strip():
        return None

    body = text.strip()
    fenced = _CODE_FENCE.match(body)
    if fenced:
        body = fenced["body"].strip()

    try:
        return json.loads(body)
    except json.JSONDecodeError as e:
        raise AdvisorResponseError(f"Model answer is not valid JSON: {e}") from e


class AdvisorClient(ABC):
    """Abstract base class for model clients.

    Example:
        >>> client = create_client(AdvisorConfig())
        >>> client.generate_json("List three colors as a JSON array", {"type": "ARRAY"})
    """

    @property
    @abstractmethod
    def description(self) -> str:
        """Short human-readable name, e.g. "Gemini (gemini-2.5-flash)"."""

    @abstractmethod
    def generate_json(self, prompt: str, schema: dict[str, Any]) -> Any:
        """Send a prompt and return the decoded JSON answer.

        Args:
            prompt: Prompt text.
            schema: Expected response shape (OpenAPI subset).

        Returns:
            Decoded JSON value, or None for an empty answer.

        Raises:
            AdvisorError: If the request or decoding fails.
        """


@dataclass
class GeminiClient(AdvisorClient):
    """Client for the Gemini REST API.

    Attributes:
        config: AdvisorConfig with model, timeout and API key variable.
        transport: Optional httpx transport (used to stub the network).
    """

    config: AdvisorConfig
    transport: httpx.BaseTransport | None = None

    @property
    def description(self) -> str:
        return f"Gemini ({self.config.effective_model})"

    def generate_json(self, prompt: str, schema: dict[str, Any]) -> Any:
        api_key = self.config.resolve_api_key()
        if api_key is None:
            msg = f"API key not found: set {self.config.api_key_env}"
            raise AdvisorAuthError(msg)

        body = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": schema,
            },
        }
        model = self.config.effective_model

        try:
            with httpx.Client(
                base_url=GEMINI_API_BASE,
                headers={"x-goog-api-key": api_key},
                timeout=float(self.config.timeout_seconds),
                transport=self.transport,
            ) as client:
                response = client.post(f"/models/{model}:generateContent", json=body)
        except httpx.TimeoutException as e:
            msg = f"Gemini request timed out after {self.config.timeout_seconds} seconds"
            raise AdvisorRequestError(msg) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise AdvisorRequestError(f"Gemini request failed: {e}") from e

        if response.status_code in (401, 403):
            raise AdvisorAuthError(f"Gemini API rejected the API key (HTTP {response.status_code})")
        if response.is_error:
            msg = f"Gemini API returned HTTP {response.status_code}: {response.text[:200]}"
            raise AdvisorRequestError(msg)

        try:
            payload = response.json()
        except json.JSONDecodeError as e:
            raise AdvisorResponseError(f"Gemini response is not JSON: {e}") from e

        return decode_json_text(self._extract_text(payload))

    def _extract_text(self, payload: Any) -> str | None:
        """Concatenate the text parts of the first candidate."""
        try:
            parts = payload["candidates"][0]["content"]["parts"]
        except (KeyError, IndexError, TypeError):
            logger.debug("Gemini response has no candidate content: %r", payload)
            return None

        texts = [p["text"] for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str)]
        return "".join(texts) or None


@dataclass
class ClaudeCliClient(AdvisorClient):
    """Client that runs the Claude Code CLI headless.

    The CLI has no response-schema option, so the expected shape is
    carried by the prompt text alone.

    Attributes:
        config: AdvisorConfig with model and timeout settings.
    """

    config: AdvisorConfig

    @property
    def description(self) -> str:
        return f"Claude CLI ({self.config.effective_model})"

    def generate_json(self, prompt: str, schema: dict[str, Any]) -> Any:
        command = self._build_command(prompt)

        try:
            result = run_command(command, timeout=float(self.config.timeout_seconds))
        except subprocess.TimeoutExpired as e:
            msg = f"Claude CLI timed out after {self.config.timeout_seconds} seconds"
            raise AdvisorRequestError(msg) from e
        except FileNotFoundError as e:
            raise AdvisorRequestError(f"Claude CLI not found: {e}") from e
        except OSError as e:
            raise AdvisorRequestError(f"Failed to execute Claude CLI: {e}") from e

        if not result.success:
            msg = result.stderr.strip() or f"Claude CLI exited with code {result.returncode}"
            raise AdvisorRequestError(msg)

        try:
            envelope = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise AdvisorResponseError(f"Claude CLI output is not JSON: {e}") from e

        if not isinstance(envelope, dict):
            raise AdvisorResponseError("Claude CLI output is not a JSON object")
        if envelope.get("is_error"):
            raise AdvisorRequestError(f"Claude CLI reported an error: {envelope.get('result')}")

        answer = envelope.get("result")
        return decode_json_text(answer if isinstance(answer, str) else None)

    def _build_command(self, prompt: str) -> list[str]:
        """Build the headless CLI invocation.

        Args:
            prompt: Prompt text.

        Returns:
            List of command arguments for subprocess execution.
        """
        return [
            "claude",
            "-p",
            prompt,
            "--output-format",
            "json",
            "--model",
            self.config.effective_model,
        ]


def create_client(config: AdvisorConfig) -> AdvisorClient:
    """Create the client for the configured provider.

    Args:
        config: Advisor configuration.

    Returns:
        GeminiClient or ClaudeCliClient.
    """
    if config.provider == "claude":
        return ClaudeCliClient(config=config)
    return GeminiClient(config=config)
