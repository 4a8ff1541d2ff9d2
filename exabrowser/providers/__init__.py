"""External provider adapters."""

from exabrowser.providers.exa import ExaClient
from exabrowser.providers.llm import TextGenerationClient
from exabrowser.providers.models import ProviderRecord, SearchClient, TextClient

__all__ = ["ExaClient", "TextGenerationClient", "ProviderRecord", "SearchClient", "TextClient"]
