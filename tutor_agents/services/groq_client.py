"""
Groq-backed completion client with round-robin API key rotation.

Exposes the single `complete(prompt) -> str` call the agents need. Every
SDK failure is re-raised as TransportError; there is no retry here, a
rate-limited key just moves the rotation on so the next call uses another.
"""
from typing import Protocol
import threading
import logging

from groq import Groq, GroqError, RateLimitError

from ..errors import TransportError

logger = logging.getLogger(__name__)


class CompletionClient(Protocol):
    """Anything that turns a prompt into generated text."""

    def complete(self, prompt: str) -> str:
        ...


class KeyRotator:
    """
    Round-robin API key rotator.

    - Thread-safe via a lock
    - Never logs key values, only indices
    """

    def __init__(self, keys: list[str], name: str = ""):
        if not keys:
            raise ValueError(f"{name or 'KeyRotator'}: at least one API key is required")
        self._keys = list(keys)
        self._index = 0
        self._lock = threading.Lock()
        self._name = name or "KeyRotator"
        logger.info(f"{self._name}: initialized with {len(self._keys)} key(s)")

    @property
    def key_count(self) -> int:
        return len(self._keys)

    def take(self) -> tuple[int, str]:
        """Return the current (index, key) and advance to the next one."""
        with self._lock:
            index = self._index
            self._index = (self._index + 1) % len(self._keys)
            return index, self._keys[index]


class GroqCompletionClient:
    """Single-shot chat completion against Groq."""

    def __init__(
        self,
        keys: list[str],
        model: str = "llama-3.3-70b-versatile",
        temperature: float = 0.5,
        max_tokens: int = 1000,
        timeout: float = 30.0,
    ):
        self._rotator = KeyRotator(keys, name="Groq")
        self._clients: dict[str, Groq] = {}
        self._clients_lock = threading.Lock()
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout

    def _get_client(self, key: str) -> Groq:
        with self._clients_lock:
            if key not in self._clients:
                # max_retries=0: one request per call, the caller contains failures
                self._clients[key] = Groq(api_key=key, timeout=self.timeout, max_retries=0)
            return self._clients[key]

    def complete(self, prompt: str) -> str:
        """
        Send *prompt* as a single user message and return the reply text.

        Raises:
            TransportError: on any API failure or an empty completion.
        """
        index, key = self._rotator.take()
        client = self._get_client(key)
        try:
            resp = client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except RateLimitError as e:
            logger.warning(f"Groq key {index} rate-limited")
            raise TransportError(f"Rate limited: {e}") from e
        except GroqError as e:
            raise TransportError(str(e) or type(e).__name__) from e

        try:
            content = resp.choices[0].message.content
        except (AttributeError, IndexError) as e:
            raise TransportError(f"Malformed completion: {e}") from e

        text = (content or "").strip()
        if not text:
            raise TransportError("Empty completion")
        return text


def get_groq_client(settings) -> GroqCompletionClient:
    """Build a rotating Groq client from application settings."""
    return GroqCompletionClient(
        settings.groq_key_list,
        model=settings.groq_model,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
        timeout=settings.llm_timeout,
    )
