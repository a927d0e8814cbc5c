# Slotwise — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Configuration loader for positional slot tables.

A config file (YAML or TOML) describes one command's positionals:

    command: cp
    help_text: Copy files
    required_all: false
    slots:
      - name: sources
        type: path
        collection: true
        required: "1-8"
      - name: dest
        type: path
        required: true
        help: Destination directory
"""
from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

import toml
import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from slotwise.logger import logger
from slotwise.positional.parser import PositionalParser

TYPE_REGISTRY: dict[str, Any] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "path": Path,
    "datetime": datetime,
}


class RawSlot(BaseModel):
    """Raw positional slot model for Slotwise configuration."""

    name: str
    type: str = "str"
    required: str | int | bool | None = None
    collection: bool = False
    default: Any = None
    choices: list[Any] | None = None
    suggestions: list[str] | None = None
    help: str = ""

    @field_validator("type")
    @classmethod
    def validate_type(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in TYPE_REGISTRY:
            raise ValueError(
                f"Unknown type '{value}'. Must be one of: {', '.join(TYPE_REGISTRY)}"
            )
        return normalized

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not value or value.startswith("-"):
            raise ValueError("positional names must be non-empty and not start with '-'")
        return value


class SlotTableConfig(BaseModel):
    """Positional table model for Slotwise configuration."""

    command: str = ""
    help_text: str = ""
    help_epilog: str = ""
    required_all: bool = False
    slots: list[RawSlot] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_names(self) -> SlotTableConfig:
        seen: set[str] = set()
        for slot in self.slots:
            if slot.name in seen:
                raise ValueError(f"Duplicate positional name: '{slot.name}'")
            seen.add(slot.name)
        return self

    def to_parser(self) -> PositionalParser:
        parser = PositionalParser(
            command_key=self.command,
            help_text=self.help_text,
            help_epilog=self.help_epilog,
            required_all=self.required_all,
        )
        for slot in self.slots:
            parser.add_argument(
                slot.name,
                type=TYPE_REGISTRY[slot.type],
                required=slot.required,
                collection=slot.collection,
                default=slot.default,
                choices=slot.choices,
                suggestions=slot.suggestions,
                help=slot.help,
            )
        return parser


def loader(file_path: Path | str) -> PositionalParser:
    """
    Load a positional slot table from a YAML or TOML file.

    Args:
        file_path (Path | str): Path to the config file.

    Returns:
        PositionalParser: A parser with every configured slot registered. The
        slot table itself is validated on first use.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the format is unsupported or the content is not a mapping.
        pydantic.ValidationError: If a slot entry is invalid.
    """
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise FileNotFoundError(f"No such config file: {file_path}")

    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as config_file:
        if suffix in (".yaml", ".yml"):
            raw_config = yaml.safe_load(config_file)
        elif suffix == ".toml":
            raw_config = toml.load(config_file)
        else:
            raise ValueError(f"Unsupported config format: {suffix}")

    if not isinstance(raw_config, dict):
        raise ValueError(
            "Configuration file must contain a dictionary with a list of slots.\n"
            "Example:\n"
            "command: 'cp'\n"
            "slots:\n"
            "  - name: 'sources'\n"
            "    collection: true\n"
            "    required: '1-8'"
        )

    config = SlotTableConfig(**raw_config)
    logger.debug("Loaded %d positional slot(s) from '%s'.", len(config.slots), path)
    return config.to_parser()
