"""
Configuration loading and validation.

Settings come from an optional YAML file and are overridden by the command
line arguments that were explicitly given. The merged result is validated
with pydantic.
"""

from argparse import Namespace
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from .constants import DefaultConfig
from .exceptions import ConfigurationError, raise_configuration_error
from .transformer import TransformOptions

logger = logging.getLogger(__name__)


class ToolConfigSchema(BaseModel):
    """Pydantic schema defining the expected structure and types for the configuration."""

    schema_path: Optional[str] = Field(
        default=None,
        description="Explicit path of the schema file. When unset, search_paths are tried in order.",
    )
    search_paths: List[str] = Field(
        default_factory=lambda: list(DefaultConfig.SEARCH_PATHS),
        min_length=1,
        description="Conventional schema locations, searched in order.",
    )
    dry: bool = Field(
        default=False,
        description="Print the rendered schema instead of writing it back.",
    )
    output_path: Optional[str] = Field(
        default=None,
        description="Write the rendered schema here instead of over the source file.",
    )
    map_unchanged_names: bool = Field(
        default=DefaultConfig.MAP_UNCHANGED_NAMES,
        description="Emit @map/@@map even when the name did not change.",
    )
    keep_existing_maps: bool = Field(
        default=DefaultConfig.KEEP_EXISTING_MAPS,
        description="Leave existing @map/@@map annotations untouched.",
    )
    indent: int = Field(
        default=DefaultConfig.INDENT,
        ge=1,
        le=8,
        description="Number of spaces used to indent block members.",
    )

    model_config = ConfigDict(extra="ignore")

    def __getitem__(self, key: str) -> Any:
        """Allow dictionary-style access."""
        return getattr(self, key)

    def get(self, key: str, default: Any = None) -> Any:
        return getattr(self, key, default)

    @field_validator("search_paths", mode="before")
    @classmethod
    def check_search_paths(cls, v: Any) -> List[str]:
        """Ensure search paths are non-empty strings."""
        if isinstance(v, str):
            v = [v]
        if not isinstance(v, list):
            raise TypeError("search_paths must be a list of paths.")
        processed = []
        for index, item in enumerate(v):
            if not isinstance(item, str) or not item.strip():
                raise ValueError(f"Item at index {index} must be a non-empty path string.")
            processed.append(item.strip())
        return processed

    @model_validator(mode="after")
    def check_output_options(self) -> "ToolConfigSchema":
        """Perform cross-field validation checks."""
        if self.dry and self.output_path:
            logger.warning("'output_path' is ignored in dry mode; the schema is printed instead.")
        return self

    def transform_options(self) -> TransformOptions:
        return TransformOptions(
            map_unchanged_names=self.map_unchanged_names,
            keep_existing_maps=self.keep_existing_maps,
        )


def validate_and_parse_config(config_dict: Dict[str, Any], config_file: Optional[str] = None) -> ToolConfigSchema:
    """
    Validates a raw configuration dictionary against the ToolConfigSchema.

    Raises:
        ConfigurationError: If validation fails
    """
    try:
        validated_config = ToolConfigSchema.model_validate(config_dict)
    except ValidationError as e:
        problems = []
        for error in e.errors():
            loc_parts = [str(loc_item) for loc_item in error.get("loc", ())]
            loc_str = " -> ".join(loc_parts) if loc_parts else "Model Level"
            problems.append(f"{loc_str}: {error.get('msg', 'Unknown validation error')}")
        raise ConfigurationError(
            "Configuration validation failed",
            config_file=config_file,
            context={"errors": "; ".join(problems)},
        ) from e

    logger.debug("Configuration dictionary parsed and validated successfully against schema.")
    return validated_config


def read_config_file(config_path: str) -> Dict[str, Any]:
    """
    Read a YAML configuration file.

    Raises:
        ConfigurationError: If the file is missing, unreadable or not a mapping
    """
    config_file = Path(config_path)
    if not config_file.is_file():
        raise_configuration_error(f"Config file not found at {config_path}", config_file=config_path)

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing YAML file {config_path}: {e}", config_file=config_path) from e
    except OSError as e:
        raise ConfigurationError(f"Error reading config file {config_path}: {e}", config_file=config_path) from e

    if yaml_config is None:
        return {}
    if not isinstance(yaml_config, dict):
        raise_configuration_error(
            f"Content in config file {config_path} is not a mapping",
            config_file=config_path,
        )
    logger.debug(f"Loaded configuration from {config_path}")
    return yaml_config


def load_config(config_path: Optional[str], cli_args: Optional[Namespace] = None) -> ToolConfigSchema:
    """
    Loads configuration from YAML file, merges with CLI arguments,
    validates the result, and returns a validated Pydantic model instance.
    """
    raw_config: Dict[str, Any] = {}

    if config_path:
        raw_config.update(read_config_file(config_path))

    # Override with CLI arguments that were explicitly given
    if cli_args is not None:
        overridden_keys = set()
        for key, value in vars(cli_args).items():
            if value is not None and key in ToolConfigSchema.model_fields:
                raw_config[key] = value
                overridden_keys.add(key)
        if overridden_keys:
            logger.debug(f"Overridden config keys from CLI arguments: {sorted(overridden_keys)}")

    return validate_and_parse_config(raw_config, config_file=config_path)
