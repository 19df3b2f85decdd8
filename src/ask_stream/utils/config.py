import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.console import Console
from ask_stream.utils import prompts

PROVIDER_OPENAI = "openai"
PROVIDER_OLLAMA = "ollama"
SUPPORTED_PROVIDERS = (PROVIDER_OPENAI, PROVIDER_OLLAMA)

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"

logger = logging.getLogger(__name__)
console = Console(stderr=True)

# Used when no models.yaml exists (or it cannot be parsed)
DEFAULT_MODELS: Dict[str, Dict[str, Any]] = {
    "gemini-flash": {
        "type": PROVIDER_OPENAI,
        "model_id": "gemini-2.5-flash",
        "base_url": GEMINI_OPENAI_BASE_URL,
        "api_key_env": "GEMINI_API_KEY",
    },
    "gpt-4o": {
        "type": PROVIDER_OPENAI,
        "model_id": "gpt-4o",
        "api_key_env": "OPENAI_API_KEY",
    },
}


def get_default_config_dir() -> Path:
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(xdg_config_home) / "ask-stream"


def get_default_models_yaml_path() -> Path:
    env_path = os.environ.get("ASK_STREAM_MODELS_CONFIG_PATH")
    if env_path:
        return Path(env_path).expanduser().resolve()
    return get_default_config_dir() / "models.yaml"


DEFAULT_MODELS_YAML = get_default_models_yaml_path()
DOTENV_PATH = get_default_config_dir() / ".env"


class Config(BaseSettings):
    MODELS_CONFIG_PATH: str = Field(default=str(DEFAULT_MODELS_YAML), description="Path to the models YAML definition file")
    DEFAULT_MODEL_ALIAS: str = Field(default="gemini-flash", description="Alias to use if --model is not specified (Set via ASK_STREAM_DEFAULT_MODEL_ALIAS)")

    # --- Pacing --- #
    CONNECT_DELAY: float = Field(default=0.5, ge=0, description="Seconds the 'Connecting' status stays visible before streaming starts")
    PREPARE_DELAY: float = Field(default=0.3, ge=0, description="Seconds the 'Preparing' status stays visible before streaming starts")

    # --- LLM Generation Settings --- #
    MAX_TOKENS: int = Field(default=1024*4, description="Default maximum tokens to generate")
    TEMPERATURE: float = Field(default=0.8, description="Default generation temperature")
    TOP_P: float = Field(default=0.95, description="Default nucleus sampling top-p")
    SYSTEM_MESSAGE: str = Field(default=prompts.SYSTEM_MESSAGE)

    # --- Backends --- #
    OLLAMA_URL: str = Field(default="http://localhost:11434")
    REQUEST_TIMEOUT: float = Field(default=120.0, description="Timeout in seconds for backend HTTP requests")

    # --- UI/Interaction Settings --- #
    VERBOSE: bool = Field(default=False, description="Verbose mode for debugging")
    PLAIN_OUTPUT: bool = Field(default=False, description="Use plain text output without in-place status updates")

    defined_models: Dict[str, Any] = Field(default_factory=dict, exclude=True)

    model_config = SettingsConfigDict(
        env_prefix="ASK_STREAM_",
        env_file=DOTENV_PATH,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra='ignore'
    )

    def __init__(self, **values: Any):
        if 'MODELS_CONFIG_PATH' in values:
            values['MODELS_CONFIG_PATH'] = str(Path(values['MODELS_CONFIG_PATH']).expanduser().resolve())
        super().__init__(**values)
        self._load_models_config()

    def _load_models_config(self):
        config_path = Path(self.MODELS_CONFIG_PATH)
        if not config_path.is_file():
            logger.debug(f"No models file at {config_path}, using built-in model definitions")
            self.defined_models = {"models": dict(DEFAULT_MODELS)}
            return

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                loaded_data = yaml.safe_load(f)
                if loaded_data is None:
                    loaded_data = {}
            if not isinstance(loaded_data, dict) or not isinstance(loaded_data.get("models"), dict):
                console.print(f"[bold red]Warning:[/bold red] Invalid format in {config_path}. Missing or invalid top-level 'models' dictionary. Using built-in models.")
                self.defined_models = {"models": dict(DEFAULT_MODELS)}
            else:
                self.defined_models = {"models": loaded_data["models"]}
        except yaml.YAMLError as e:
            console.print(f"[bold red]Error parsing YAML file {config_path}:[/bold red] {e}")
            self.defined_models = {"models": dict(DEFAULT_MODELS)}
        except OSError as e:
            console.print(f"[bold red]Error loading models config {config_path}:[/bold red] {e}")
            self.defined_models = {"models": dict(DEFAULT_MODELS)}

    def get_model_options(self) -> List[str]:
        defined = self.defined_models.get("models", {})
        available_options = [
            alias for alias, model_info in defined.items()
            if isinstance(model_info, dict) and model_info.get("model_id")
        ]
        return sorted(set(available_options))

    def resolve_model_alias(self, requested: Optional[str] = None) -> Optional[str]:
        """Resolve a requested alias to a defined one.

        Exact matches win; otherwise a case-insensitive substring match is
        accepted only when it is unique. Returns None when nothing matches.
        """
        requested = requested or self.DEFAULT_MODEL_ALIAS
        options = self.get_model_options()
        if requested in options:
            return requested
        matches = [alias for alias in options if requested.lower() in alias.lower()]
        if len(matches) == 1:
            logger.debug(f"Resolved partial model alias '{requested}' to '{matches[0]}'")
            return matches[0]
        if matches:
            logger.debug(f"Ambiguous model alias '{requested}': {matches}")
        return None

    def get_model_definition(self, alias: str) -> Optional[Dict[str, Any]]:
        return self.defined_models.get("models", {}).get(alias)
