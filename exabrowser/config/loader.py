"""Read and write ~/.exabrowser/config.json."""

import json
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from exabrowser.config.schema import CEREBRAS_BASE_URL, EXA_BASE_URL, GROQ_BASE_URL, Config


def get_config_path() -> Path:
    return Path.home() / ".exabrowser" / "config.json"


def load_config(config_path: Path | None = None) -> Config:
    """
    Load provider credentials and summary/proxy settings.

    Legacy top-level ``exaApiKey`` / ``groqApiKey`` / ``cerebrasApiKey`` entries
    are migrated first. A missing, unreadable or invalid file yields the
    defaults, in which case API keys come from the environment.
    """
    path = config_path or get_config_path()

    if path.exists():
        try:
            with open(path) as f:
                data = json.load(f)
            data = _migrate_config(data)
            return Config.model_validate(data)
        except (json.JSONDecodeError, ValidationError, ValueError) as e:
            logger.warning("Failed to load config from {}: {}", path, e)
            logger.warning("Using default configuration.")

    return Config()


def save_config(config: Config, config_path: Path | None = None) -> None:
    """Write the config as camelCase JSON, creating ~/.exabrowser if needed."""
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(by_alias=True)

    with open(path, "w") as f:
        json.dump(data, f, indent=2)


def _migrate_config(data: dict) -> dict:
    """Move legacy API keys under providers and fill empty base URLs."""
    if not isinstance(data, dict):
        raise ValueError("config root must be a JSON object")

    providers_cfg = data.setdefault("providers", {})

    # Move legacy top-level <name>ApiKey -> providers.<name>.apiKey
    for name in ("exa", "groq", "cerebras"):
        legacy_key = data.pop(f"{name}ApiKey", None)
        if not legacy_key:
            continue
        provider_cfg = providers_cfg.setdefault(name, {})
        if not provider_cfg.get("apiKey"):
            provider_cfg["apiKey"] = legacy_key

    # Fill default provider base URLs when present but empty
    default_base_urls = {
        "exa": EXA_BASE_URL,
        "groq": GROQ_BASE_URL,
        "cerebras": CEREBRAS_BASE_URL,
    }
    for name, base_url in default_base_urls.items():
        provider_cfg = providers_cfg.get(name)
        if provider_cfg is not None and not provider_cfg.get("baseUrl"):
            provider_cfg["baseUrl"] = base_url

    return data
