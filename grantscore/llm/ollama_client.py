"""Ollama API client for text generation."""

from typing import Any, Dict

import requests

from grantscore.config import Config
from grantscore.llm.provider import GenerationOptions
from grantscore.utils.logging_config import get_logger

logger = get_logger()


class OllamaClient:
    """Text generator backed by an Ollama server."""

    def __init__(self, host: str = "http://localhost:11434", timeout: int = 120):
        """Initialize Ollama client.

        Args:
            host: Ollama API host URL
            timeout: Request timeout in seconds
        """
        self.host = host.rstrip("/")
        self.timeout = timeout
        self.generate_url = f"{self.host}/api/generate"
        self.tags_url = f"{self.host}/api/tags"

    @classmethod
    def from_config(cls, config: Config) -> "OllamaClient":
        """Build a client for the configured Ollama host."""
        return cls(config.ollama_host, timeout=config.llm_timeout)

    def check_health(self) -> bool:
        """Check if Ollama is running and accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            response = requests.get(self.tags_url, timeout=5)
            return response.status_code == 200
        except requests.RequestException as e:
            logger.error(f"Ollama health check failed: {e}")
            return False

    def generate(self, prompt: str, options: GenerationOptions) -> str:
        """Generate text using Ollama.

        Args:
            prompt: Input prompt
            options: Model, temperature and token limit

        Returns:
            Generated text

        Raises:
            RuntimeError: If generation fails
        """
        payload: Dict[str, Any] = {
            "model": options.model,
            "prompt": prompt,
            "stream": False,
            "options": {
                "temperature": options.temperature,
            },
        }

        if options.max_tokens:
            payload["options"]["num_predict"] = options.max_tokens

        try:
            response = requests.post(
                self.generate_url,
                json=payload,
                timeout=self.timeout,
            )
            response.raise_for_status()

            data = response.json()
            return data.get("response", "")

        except requests.RequestException as e:
            logger.error(f"Ollama generation failed: {e}")
            raise RuntimeError(f"Ollama generation failed: {e}") from e

