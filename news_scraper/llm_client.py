"""
LLM Client with OpenAI/Anthropic provider switch.

Uses the Factory pattern (LLMClient.create) to instantiate the right provider
based on env vars or explicit argument.  Each provider implements BaseLLMClient
so the Rewriter doesn't need to know which LLM is behind the call.
"""

import os
from abc import ABC, abstractmethod
from typing import Optional
from enum import Enum

from .logger import get_module_logger
from .exceptions import LLMClientError

logger = get_module_logger("llm_client")

# Output budget for one rewrite. Long articles come back as long Markdown.
DEFAULT_MAX_TOKENS = 16384


class LLMProvider(Enum):
    """Supported LLM providers."""
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


# Environment variables holding each provider's credential, in lookup order.
# OPEN_AI_SECRET is the name older deployments used.
API_KEY_ENV_VARS = {
    LLMProvider.OPENAI: ("OPENAI_API_KEY", "OPEN_AI_SECRET"),
    LLMProvider.ANTHROPIC: ("ANTHROPIC_API_KEY",),
}


def missing_key_message(provider: LLMProvider) -> str:
    return f"Please set the {API_KEY_ENV_VARS[provider][0]} environment variable."


def _api_key_from_env(provider: LLMProvider) -> Optional[str]:
    for name in API_KEY_ENV_VARS[provider]:
        value = os.getenv(name)
        if value:
            return value
    return None


class BaseLLMClient(ABC):
    """Abstract base class for LLM clients."""

    @abstractmethod
    def complete(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        """
        Send a prompt to the LLM and return the response.

        Args:
            prompt: The user prompt
            system_prompt: Optional system prompt

        Returns:
            The LLM's response text
        """
        pass


class OpenAIClient(BaseLLMClient):
    """OpenAI API client."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4o",
        max_tokens: int = DEFAULT_MAX_TOKENS
    ):
        self.api_key = api_key or _api_key_from_env(LLMProvider.OPENAI)
        if not self.api_key:
            raise LLMClientError(
                missing_key_message(LLMProvider.OPENAI),
                provider="openai"
            )
        self.model = model
        self.max_tokens = max_tokens

        # Lazy import: only import the openai SDK when this provider is actually
        # used.  This avoids ImportError when only Anthropic is installed.
        try:
            from openai import OpenAI
            self.client = OpenAI(api_key=self.api_key)
        except ImportError:
            raise LLMClientError(
                "openai package not installed. Run: pip install openai",
                provider="openai"
            )

    def complete(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        """Send prompt to OpenAI and return response."""
        messages = []

        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})

        messages.append({"role": "user", "content": prompt})

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=self.max_tokens,
                # Formatting, not creative writing
                temperature=0.1
            )
            return response.choices[0].message.content or ""
        except Exception as e:
            logger.error(f"OpenAI API error: {e}")
            raise LLMClientError(
                f"OpenAI API call failed: {str(e)}",
                provider="openai",
                details={"error": str(e)}
            )


class AnthropicClient(BaseLLMClient):
    """Anthropic API client."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "claude-sonnet-4-20250514",
        max_tokens: int = DEFAULT_MAX_TOKENS
    ):
        self.api_key = api_key or _api_key_from_env(LLMProvider.ANTHROPIC)
        if not self.api_key:
            raise LLMClientError(
                missing_key_message(LLMProvider.ANTHROPIC),
                provider="anthropic"
            )
        self.model = model
        self.max_tokens = max_tokens

        # Lazy import, as in OpenAIClient: only require the
        # anthropic SDK when this provider is selected.
        try:
            import anthropic
            self.client = anthropic.Anthropic(api_key=self.api_key)
        except ImportError:
            raise LLMClientError(
                "anthropic package not installed. Run: pip install anthropic",
                provider="anthropic"
            )

    def complete(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        """Send prompt to Anthropic and return response."""
        try:
            kwargs = {
                "model": self.model,
                "max_tokens": self.max_tokens,
                "messages": [{"role": "user", "content": prompt}]
            }

            if system_prompt:
                kwargs["system"] = system_prompt

            response = self.client.messages.create(**kwargs)
            return "".join(
                block.text for block in response.content if getattr(block, "type", "") == "text"
            )
        except Exception as e:
            logger.error(f"Anthropic API error: {e}")
            raise LLMClientError(
                f"Anthropic API call failed: {str(e)}",
                provider="anthropic",
                details={"error": str(e)}
            )


def resolve_provider(provider: Optional[LLMProvider] = None) -> LLMProvider:
    """Explicit arg > LLM_PROVIDER env var > OpenAI."""
    if isinstance(provider, LLMProvider):
        return provider
    if provider is not None:
        try:
            return LLMProvider(str(provider).lower())
        except ValueError:
            raise LLMClientError(
                f"Unsupported provider: {provider}",
                provider=str(provider)
            )

    provider_str = os.getenv("LLM_PROVIDER", "openai").lower()
    try:
        return LLMProvider(provider_str)
    except ValueError:
        logger.warning(
            f"Unknown LLM_PROVIDER '{provider_str}', defaulting to openai"
        )
        return LLMProvider.OPENAI


class LLMClient:
    """
    Factory class for creating LLM clients with provider switch.

    Usage:
        # Using environment variable LLM_PROVIDER
        client = LLMClient.create()

        # Explicit provider
        client = LLMClient.create(provider=LLMProvider.OPENAI)
        client = LLMClient.create(provider=LLMProvider.ANTHROPIC, model="claude-sonnet-4-20250514")
    """

    @staticmethod
    def create(
        provider: Optional[LLMProvider] = None,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: int = DEFAULT_MAX_TOKENS
    ) -> BaseLLMClient:
        """
        Create an LLM client for the specified provider.

        Args:
            provider: LLM provider (defaults to env var LLM_PROVIDER or 'openai')
            api_key: API key (defaults to provider-specific env var)
            model: Model name (defaults to provider-specific default)
            max_tokens: Output budget per call

        Returns:
            Configured LLM client

        Raises:
            LLMClientError: missing credential or SDK
        """
        provider = resolve_provider(provider)
        logger.info(f"Creating LLM client for provider: {provider.value}")

        kwargs = {"api_key": api_key, "max_tokens": max_tokens}
        if model:
            kwargs["model"] = model

        if provider == LLMProvider.OPENAI:
            return OpenAIClient(**kwargs)
        return AnthropicClient(**kwargs)
