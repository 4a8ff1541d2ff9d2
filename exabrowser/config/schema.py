"""Configuration schema using Pydantic."""

import os
from typing import ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

EXA_BASE_URL = "https://api.exa.ai"
GROQ_BASE_URL = "https://api.groq.com/openai/v1"
CEREBRAS_BASE_URL = "https://api.cerebras.ai/v1"


class Base(BaseModel):
    """Base model accepting both camelCase and snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ExaProviderConfig(Base):
    """Exa search-and-contents API settings."""

    api_key: str = ""
    base_url: str = EXA_BASE_URL
    timeout: float = 30.0

    def resolved_api_key(self) -> str:
        return self.api_key or os.environ.get("EXA_API_KEY", "")


class ChatProviderConfig(Base):
    """OpenAI-compatible chat completions endpoint."""

    ENV_KEY: ClassVar[str] = ""
    DISPLAY_NAME: ClassVar[str] = ""

    api_key: str = ""
    base_url: str = ""
    model: str = ""
    timeout: float = 60.0

    def resolved_api_key(self) -> str:
        return self.api_key or os.environ.get(self.ENV_KEY, "")


class GroqProviderConfig(ChatProviderConfig):
    ENV_KEY: ClassVar[str] = "GROQ_API_KEY"
    DISPLAY_NAME: ClassVar[str] = "Groq"

    base_url: str = GROQ_BASE_URL
    model: str = "llama-3.3-70b-versatile"


class CerebrasProviderConfig(ChatProviderConfig):
    ENV_KEY: ClassVar[str] = "CEREBRAS_API_KEY"
    DISPLAY_NAME: ClassVar[str] = "Cerebras"

    base_url: str = CEREBRAS_BASE_URL
    model: str = "gpt-oss-120b"


class ProvidersConfig(Base):
    exa: ExaProviderConfig = Field(default_factory=ExaProviderConfig)
    groq: GroqProviderConfig = Field(default_factory=GroqProviderConfig)
    cerebras: CerebrasProviderConfig = Field(default_factory=CerebrasProviderConfig)


class SummaryConfig(Base):
    """Mention summary prompt settings."""

    provider: Literal["groq", "cerebras"] = "groq"
    temperature: float = 0.7
    max_tokens: int = 1500
    max_items: int = 30
    excerpt_chars: int = 200


class ProxyConfig(Base):
    """Embedded browser page proxy settings."""

    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )
    timeout: float = 20.0


class Config(Base):
    """Root configuration for exabrowser."""

    providers: ProvidersConfig = Field(default_factory=ProvidersConfig)
    summary: SummaryConfig = Field(default_factory=SummaryConfig)
    proxy: ProxyConfig = Field(default_factory=ProxyConfig)

    def chat_provider(self) -> ChatProviderConfig:
        """Return the chat provider selected for mention summaries."""
        return getattr(self.providers, self.summary.provider)
