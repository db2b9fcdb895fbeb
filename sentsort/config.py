"""Configuration model and loaders for sentsort.

Responsibilities:
- Define export configuration as a typed dataclass.
- Resolve output artifact names and paths.
- Provide loader entry points for file- and environment-based configuration.

Key types:
- `ExportConfig`: normalized settings for one export run.
- `ConfigLoader`: static construction helpers for `ExportConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .io.extractor import DEFAULT_CHUNK_SIZE_CHARS
from .parsing import (
    normalize_optional_string,
    parse_positive_int,
    parse_required_boolean,
    parse_string_list,
)
from .text.normalizer import DEFAULT_ABBREVIATIONS


DEFAULT_INPUT_PATH = Path("samples") / "in" / "small.in"
DEFAULT_OUTPUT_DIR = Path("samples") / "out"
_TIMESTAMP_FORMAT = "%H-%M-%S"


@dataclass(slots=True)
class ExportConfig:
    """Runtime configuration for one export run.

    Attributes:
        input_path: Path to the UTF-8 input text file.
        output_dir: Directory receiving the XML and CSV outputs.
        output_name: Optional base name for outputs, defaulting to the input stem.
        chunk_size_chars: Characters read from the input per extraction cycle.
        abbreviations: Tokens kept with their trailing period and never split on.
        timestamp_suffix: Whether to append `_HH-MM-SS` to the output base name.
    """

    input_path: Path = DEFAULT_INPUT_PATH
    output_dir: Path = DEFAULT_OUTPUT_DIR
    output_name: str | None = None
    chunk_size_chars: int = DEFAULT_CHUNK_SIZE_CHARS
    abbreviations: tuple[str, ...] = DEFAULT_ABBREVIATIONS
    timestamp_suffix: bool = False

    def validate(self) -> None:
        """Validate configuration values before export execution."""

        if isinstance(self.chunk_size_chars, bool) or self.chunk_size_chars <= 0:
            raise ValueError("`chunk_size_chars` must be a positive integer.")
        for abbreviation in self.abbreviations:
            if not abbreviation or abbreviation != abbreviation.strip():
                raise ValueError("`abbreviations` entries must be non-empty without padding.")
            if not abbreviation.endswith(".") or len(abbreviation) < 2:
                raise ValueError(
                    f"`abbreviations` entry `{abbreviation}` must be a word followed by a period."
                )
        if self.output_name is not None:
            name = self.output_name.strip()
            if not name:
                raise ValueError("`output_name` must not be blank.")
            if "/" in name or "\\" in name or name in {".", ".."}:
                raise ValueError("`output_name` must be a file name, not a path.")

    def resolved_output_name(self, now: datetime | None = None) -> str:
        """Return the output base name, optionally suffixed with the current time."""

        base_name = self.output_name.strip() if self.output_name else self.input_path.stem
        if not self.timestamp_suffix:
            return base_name
        moment = now if now is not None else datetime.now()
        return f"{base_name}_{moment.strftime(_TIMESTAMP_FORMAT)}"

    def output_paths(self, now: datetime | None = None) -> tuple[Path, Path]:
        """Return the XML and CSV output paths for this run."""

        name = self.resolved_output_name(now)
        return self.output_dir / f"{name}.xml", self.output_dir / f"{name}.csv"


class ConfigLoader:
    """Factory methods for creating `ExportConfig` from external sources."""

    _REQUIRED_YAML_KEYS = frozenset({"input_path"})
    _SUPPORTED_YAML_KEYS = frozenset(
        {
            "input_path",
            "output_dir",
            "output_name",
            "chunk_size_chars",
            "abbreviations",
            "timestamp_suffix",
        }
    )

    @staticmethod
    def from_yaml(path: Path) -> ExportConfig:
        """Create a validated config from a YAML file."""

        path_text = path.read_text(encoding="utf-8")
        payload = ConfigLoader._parse_yaml_payload(path_text, path)

        return ConfigLoader._build_config_from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> ExportConfig:
        """Create a validated config from environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env

        input_path = ConfigLoader._required_env_path(env_map, "SENTSORT_INPUT_PATH")
        output_dir = (
            ConfigLoader._optional_env_path(env_map, "SENTSORT_OUTPUT_DIR") or DEFAULT_OUTPUT_DIR
        )
        output_name = normalize_optional_string(env_map.get("SENTSORT_OUTPUT_NAME"))

        chunk_size = DEFAULT_CHUNK_SIZE_CHARS
        raw_chunk_size = normalize_optional_string(env_map.get("SENTSORT_CHUNK_SIZE_CHARS"))
        if raw_chunk_size is not None:
            chunk_size = parse_positive_int(raw_chunk_size, "SENTSORT_CHUNK_SIZE_CHARS")

        abbreviations = DEFAULT_ABBREVIATIONS
        raw_abbreviations = normalize_optional_string(env_map.get("SENTSORT_ABBREVIATIONS"))
        if raw_abbreviations is not None:
            abbreviations = parse_string_list(raw_abbreviations, "SENTSORT_ABBREVIATIONS")

        timestamp_suffix = False
        raw_timestamp = normalize_optional_string(env_map.get("SENTSORT_TIMESTAMP_SUFFIX"))
        if raw_timestamp is not None:
            timestamp_suffix = parse_required_boolean(raw_timestamp, "SENTSORT_TIMESTAMP_SUFFIX")

        config = ExportConfig(
            input_path=input_path,
            output_dir=output_dir,
            output_name=output_name,
            chunk_size_chars=chunk_size,
            abbreviations=abbreviations,
            timestamp_suffix=timestamp_suffix,
        )
        config.validate()
        return config

    @staticmethod
    def _parse_yaml_payload(raw_text: str, path: Path) -> Mapping[str, Any]:
        """Parse YAML text and enforce a mapping root payload."""

        try:
            payload = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            raise ValueError(f"YAML config `{path}` is not valid YAML: {exc}") from exc

        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return payload

    @staticmethod
    def _build_config_from_mapping(
        payload: Mapping[str, Any], source_label: str
    ) -> ExportConfig:
        """Build and validate a config from a parsed mapping payload."""

        ConfigLoader._validate_yaml_keys(payload, source_label)

        input_path = ConfigLoader._required_path(payload, "input_path", source_label)
        output_dir_text = normalize_optional_string(payload.get("output_dir"))
        output_dir = Path(output_dir_text) if output_dir_text is not None else DEFAULT_OUTPUT_DIR
        output_name = normalize_optional_string(payload.get("output_name"))

        chunk_size = DEFAULT_CHUNK_SIZE_CHARS
        if payload.get("chunk_size_chars") is not None:
            chunk_size = ConfigLoader._field_value(
                parse_positive_int, payload["chunk_size_chars"], "chunk_size_chars", source_label
            )

        abbreviations = DEFAULT_ABBREVIATIONS
        if payload.get("abbreviations") is not None:
            abbreviations = ConfigLoader._field_value(
                parse_string_list, payload["abbreviations"], "abbreviations", source_label
            )

        timestamp_suffix = False
        if payload.get("timestamp_suffix") is not None:
            timestamp_suffix = ConfigLoader._field_value(
                parse_required_boolean,
                payload["timestamp_suffix"],
                "timestamp_suffix",
                source_label,
            )

        config = ExportConfig(
            input_path=input_path,
            output_dir=output_dir,
            output_name=output_name,
            chunk_size_chars=chunk_size,
            abbreviations=abbreviations,
            timestamp_suffix=timestamp_suffix,
        )
        config.validate()
        return config

    @staticmethod
    def _field_value(parser: Any, raw_value: object, key: str, source_label: str) -> Any:
        """Run a field parser and prefix its error with the config source."""

        try:
            return parser(raw_value, key)
        except ValueError as exc:
            raise ValueError(f"{source_label} field {exc}") from exc

    @staticmethod
    def _validate_yaml_keys(payload: Mapping[str, Any], source_label: str) -> None:
        """Validate supported and required YAML keys."""

        unknown = sorted(set(payload).difference(ConfigLoader._SUPPORTED_YAML_KEYS))
        if unknown:
            key_list = ", ".join(unknown)
            raise ValueError(f"{source_label} includes unsupported key(s): {key_list}.")

        missing = sorted(
            key for key in ConfigLoader._REQUIRED_YAML_KEYS if key not in payload
        )
        if missing:
            key_list = ", ".join(missing)
            raise ValueError(f"{source_label} is missing required key(s): {key_list}.")

    @staticmethod
    def _required_path(payload: Mapping[str, Any], key: str, source_label: str) -> Path:
        """Read a required non-empty path-like field from a payload."""

        value = normalize_optional_string(payload.get(key))
        if value is None:
            raise ValueError(f"{source_label} requires non-empty `{key}`.")
        return Path(value)

    @staticmethod
    def _required_env_path(env: Mapping[str, str], key: str) -> Path:
        """Read a required path from the environment mapping."""

        value = normalize_optional_string(env.get(key))
        if value is None:
            raise ValueError(f"Environment variable `{key}` is required.")
        return Path(value)

    @staticmethod
    def _optional_env_path(env: Mapping[str, str], key: str) -> Path | None:
        """Read an optional path from the environment mapping."""

        value = normalize_optional_string(env.get(key))
        if value is None:
            return None
        return Path(value)
