"""Settings for the AI advisor.

The advisor talks to either the Gemini API over HTTPS (the default) or
a local Claude Code CLI in headless mode. Settings live in
~/.config/pipmaster/advisor.toml; every key is optional:

    provider = "gemini"            # or "claude"
    model = "gemini-2.5-pro"       # omit for the provider default
    timeout_seconds = 60           # 5-600
    api_key_env = "GEMINI_API_KEY" # variable holding the Gemini key

The API key itself is never stored in the file.
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Literal

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pipmaster.core.paths import get_advisor_config_path

logger = logging.getLogger(__name__)

AdvisorProvider = Literal["gemini", "claude"]

DEFAULT_MODELS: dict[AdvisorProvider, str] = {
    "gemini": "gemini-2.5-flash",
    "claude": "sonnet",
}

DEFAULT_API_KEY_ENV = "GEMINI_API_KEY"
DEFAULT_TIMEOUT_SECONDS = 60

# Consulted when the configured variable is empty
FALLBACK_API_KEY_ENV = "API_KEY"


class AdvisorConfig(BaseModel):
    """Advisor settings as read from advisor.toml.

    Attributes:
        provider: Which backend answers prompts.
        model: Model override; None selects the provider default.
        timeout_seconds: Upper bound for a single request.
        api_key_env: Environment variable holding the Gemini API key.
    """

    model_config = ConfigDict(extra="forbid")

    provider: AdvisorProvider = "gemini"
    model: str | None = None
    timeout_seconds: int = Field(default=DEFAULT_TIMEOUT_SECONDS, ge=5, le=600)
    api_key_env: str = Field(default=DEFAULT_API_KEY_ENV, min_length=1)

    @property
    def effective_model(self) -> str:
        """Model name sent to the provider."""
        return self.model or DEFAULT_MODELS[self.provider]

    def resolve_api_key(self) -> str | None:
        """Look up the API key, trying ``api_key_env`` then ``API_KEY``.

        Blank values count as unset.
        """
        names = (self.api_key_env, FALLBACK_API_KEY_ENV)
        candidates = (os.environ.get(name, "") for name in names)
        return next((value.strip() for value in candidates if value.strip()), None)

    def to_toml_data(self) -> dict[str, object]:
        """Settings worth writing: the provider plus anything non-default."""
        data = self.model_dump(exclude_defaults=True, exclude_none=True)
        return {"provider": self.provider, **data}


class AdvisorConfigError(Exception):
    """advisor.toml could not be read, parsed or written."""


class AdvisorConfigNotFoundError(AdvisorConfigError):
    """advisor.toml does not exist."""


class AdvisorConfigParseError(AdvisorConfigError):
    """advisor.toml is not valid TOML."""


def load_advisor_config(path: Path | None = None) -> AdvisorConfig:
    """Read and validate advisor.toml.

    Args:
        path: File to read. Defaults to the XDG config location.

    Raises:
        AdvisorConfigNotFoundError: The file does not exist.
        AdvisorConfigParseError: The file is not valid TOML.
        AdvisorConfigError: The file is unreadable or fails validation.
    """
    config_path = path or get_advisor_config_path()

    try:
        raw = config_path.read_bytes()
    except FileNotFoundError as e:
        raise AdvisorConfigNotFoundError(f"Advisor config not found: {config_path}") from e
    except OSError as e:
        raise AdvisorConfigError(f"Cannot read {config_path}: {e}") from e

    try:
        data = tomllib.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        raise AdvisorConfigParseError(f"{config_path} is not valid TOML: {e}") from e

    try:
        return AdvisorConfig.model_validate(data)
    except ValidationError as e:
        raise AdvisorConfigError(f"Invalid advisor config in {config_path}: {e}") from e


def save_advisor_config(config: AdvisorConfig, path: Path | None = None) -> Path:
    """Write advisor.toml, replacing any previous file in one step.

    The content goes to a sibling ``.tmp`` file first so readers never
    see a half-written config.

    Returns:
        The path written.

    Raises:
        AdvisorConfigError: The file could not be written.
    """
    config_path = path or get_advisor_config_path()
    staging = config_path.with_name(f"{config_path.name}.tmp")

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        staging.write_text(tomli_w.dumps(config.to_toml_data()), encoding="utf-8")
        staging.replace(config_path)
    except OSError as e:
        staging.unlink(missing_ok=True)
        raise AdvisorConfigError(f"Cannot write {config_path}: {e}") from e

    logger.debug("Wrote advisor config %s", config_path)
    return config_path


def load_or_default_config(path: Path | None = None) -> AdvisorConfig:
    """Like load_advisor_config, but never fails.

    A missing file quietly yields defaults. Any other problem is logged
    as a warning before falling back to defaults.
    """
    try:
        return load_advisor_config(path)
    except AdvisorConfigNotFoundError:
        return AdvisorConfig()
    except AdvisorConfigError as e:
        logger.warning("Ignoring advisor config, using defaults: %s", e)
        return AdvisorConfig()
