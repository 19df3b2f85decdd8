import logging
from typing import Optional

from .base import LLMClient, FragmentCallback
from .openai_client import OpenAIClient
from .ollama_client import OllamaClient, OllamaStreamError
from ..exceptions import BackendConfigurationError
from ..utils.config import Config, PROVIDER_OLLAMA, PROVIDER_OPENAI

logger = logging.getLogger(__name__)


def create_client(config: Config, alias: Optional[str] = None) -> LLMClient:
    """Build the streaming client for a model alias (default alias if None)."""
    resolved = config.resolve_model_alias(alias)
    if not resolved:
        options = ", ".join(config.get_model_options()) or "none defined"
        raise BackendConfigurationError(f"Unknown model alias '{alias or config.DEFAULT_MODEL_ALIAS}'. Available: {options}")

    model_definition = config.get_model_definition(resolved)
    model_type = model_definition.get("type")
    model_id = model_definition.get("model_id")
    logger.debug(f"Initializing client for model: {resolved} (Type: {model_type}, id: {model_id})")

    if model_type == PROVIDER_OPENAI:
        return OpenAIClient(
            model_id,
            config=config,
            base_url=model_definition.get("base_url"),
            api_key_env=model_definition.get("api_key_env", "OPENAI_API_KEY"),
        )
    if model_type == PROVIDER_OLLAMA:
        return OllamaClient(model_id, config=config)
    raise BackendConfigurationError(f"Unsupported model type '{model_type}' defined for alias '{resolved}' in {config.MODELS_CONFIG_PATH}")


__all__ = ['LLMClient', 'FragmentCallback', 'OpenAIClient', 'OllamaClient', 'OllamaStreamError', 'create_client']
