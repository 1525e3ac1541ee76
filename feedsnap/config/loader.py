"""Configuration loader."""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from ..errors import ConfigurationError
from .models import BuildConfig, SourceConfig, normalize_source_record

DEFAULT_CONFIG_PATH = Path("feedsnap.yaml")


class Config:
    """Configuration manager."""

    def __init__(self, config_path: Optional[Path] = None, required: Optional[bool] = None) -> None:
        """Initialize config manager. An explicitly given config file must exist."""
        self.required = config_path is not None if required is None else required
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH
        self.config_path = config_path
        self._config: Optional[BuildConfig] = None

    @property
    def config(self) -> BuildConfig:
        """Get loaded config."""
        if self._config is None:
            self._config = load_config(self.config_path, required=self.required)
        return self._config

    @property
    def sources_path(self) -> Path:
        return Path(self.config.sources_path).expanduser()

    @property
    def output_path(self) -> Path:
        return Path(self.config.output_path).expanduser()

    def override(self, **values: Any) -> None:
        """Replace config values with the ones given (None means keep)."""
        updates = {key: value for key, value in values.items() if value is not None}
        if not updates:
            return
        merged = {**self.config.model_dump(), **updates}
        try:
            self._config = BuildConfig(**merged)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}")

    def get_facebook_token(self) -> Optional[str]:
        """Get the Graph API token from the environment, if set."""
        token = os.environ.get(self.config.facebook_token_env, "").strip()
        return token or None


def load_config(config_path: Path, required: bool = False) -> BuildConfig:
    """Load configuration from YAML file; a missing optional file means defaults."""
    if not config_path.exists():
        if required:
            raise ConfigurationError(f"Config file not found: {config_path}")
        return BuildConfig()

    try:
        with open(config_path, encoding="utf-8") as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            config_data = {}
        if not isinstance(config_data, dict):
            raise ConfigurationError(f"Config file must be a mapping: {config_path}")

        return BuildConfig(**config_data)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file: {e}")
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def parse_sources(sources_data: Any) -> List[SourceConfig]:
    """Validate a parsed source document into an ordered registry."""
    if not isinstance(sources_data, dict) or not isinstance(sources_data.get("sources"), list):
        raise ConfigurationError('Source document must contain a top-level "sources" array')

    records: List[Dict[str, str]] = []
    for index, raw in enumerate(sources_data["sources"]):
        if not isinstance(raw, dict):
            raise ConfigurationError(f"Source entry #{index} is not an object: {raw!r}")
        records.append(normalize_source_record(raw))

    missing = [r for r in records if not r["id"] or not r["company"] or not r["pageUrl"]]
    if missing:
        raise ConfigurationError(
            "Invalid source entries (missing id/company/pageUrl): "
            + ", ".join(json.dumps(m) for m in missing)
        )

    seen = set()
    for record in records:
        if record["id"] in seen:
            raise ConfigurationError(f"Duplicate source id: {record['id']}")
        seen.add(record["id"])

    try:
        return [SourceConfig(**record) for record in records]
    except ValidationError as e:
        raise ConfigurationError(f"Invalid source entry: {e}")


def load_sources(sources_path: Path) -> List[SourceConfig]:
    """Load sources from a JSON or YAML file."""
    if not sources_path.exists():
        raise ConfigurationError(f"Sources file not found: {sources_path}")

    try:
        with open(sources_path, encoding="utf-8") as f:
            if sources_path.suffix.lower() == ".json":
                sources_data = json.load(f)
            else:
                sources_data = yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Invalid sources file {sources_path}: {e}")
    except OSError as e:
        raise ConfigurationError(f"Cannot read sources file {sources_path}: {e}")

    return parse_sources(sources_data)
