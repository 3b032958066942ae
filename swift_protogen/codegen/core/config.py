"""
Configuration management for code generation.

Handles loading and merging generator options from JSON files and
protoc-style parameter strings, providing defaults and validation.
"""

import json
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from ...logging_config import get_logger

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


class OutputNaming(Enum):
    """How the output filename is derived from the input path."""

    FULL_PATH = "FullPath"
    PATH_TO_UNDERSCORES = "PathToUnderscores"
    DROP_PATH = "DropPath"


class Visibility(Enum):
    """Access level of generated declarations."""

    PUBLIC = "Public"
    FILE_LOCAL = "Internal"


class GenerationMode(Enum):
    """Full output, or the reduced lite profile."""

    FULL = "full"
    LITE = "lite"

    def __str__(self) -> str:
        return self.value


class ImportDirective(Enum):
    """Form used for emitted import statements."""

    PLAIN = "plain"
    IMPLEMENTATION_ONLY = "implementationOnly"
    ACCESS_LEVEL = "accessLevel"

    @property
    def snippet(self) -> str:
        if self == ImportDirective.IMPLEMENTATION_ONLY:
            return "@_implementationOnly import"
        if self == ImportDirective.ACCESS_LEVEL:
            return "internal import"
        return "import"


DEFAULT_RUNTIME_MODULE = "SwiftProtobuf"


@dataclass(frozen=True)
class GeneratorOptions:
    """Options shared by every file of one generation run."""

    output_naming: OutputNaming = OutputNaming.FULL_PATH
    import_directive: ImportDirective = ImportDirective.PLAIN
    visibility: Visibility = Visibility.FILE_LOCAL
    generation_mode: GenerationMode = GenerationMode.FULL

    # proto file path -> module name
    proto_to_module_mappings: Mapping[str, str] = field(
        default_factory=dict, hash=False
    )
    # Path substrings that turn on shortened type naming (lite mode)
    shorten_type_naming_files: Tuple[str, ...] = ()

    runtime_module_name: str = DEFAULT_RUNTIME_MODULE

    @property
    def is_lite_mode(self) -> bool:
        return self.generation_mode == GenerationMode.LITE

    @property
    def visibility_prefix(self) -> str:
        return "public " if self.visibility == Visibility.PUBLIC else ""


# Accepted spellings for each option key (case-insensitive values)
_ENUM_KEYS = {
    "output_naming": OutputNaming,
    "import_directive": ImportDirective,
    "visibility": Visibility,
    "generation_mode": GenerationMode,
}

_VALUE_ALIASES = {
    Visibility: {"filelocal": Visibility.FILE_LOCAL, "file_local": Visibility.FILE_LOCAL},
    OutputNaming: {
        "full_path": OutputNaming.FULL_PATH,
        "path_to_underscores": OutputNaming.PATH_TO_UNDERSCORES,
        "drop_path": OutputNaming.DROP_PATH,
    },
}

# protoc plugin parameter name -> option key
_PARAMETER_KEYS = {
    "filenaming": "output_naming",
    "visibility": "visibility",
    "importdirective": "import_directive",
    "generationmode": "generation_mode",
    "protopathmodulemappings": "module_mappings_file",
    "shortentypenamingfiles": "shorten_type_naming_files",
    "runtimemodulename": "runtime_module_name",
}


def _parse_enum(enum_cls, key: str, value: Any):
    if isinstance(value, enum_cls):
        return value
    text = str(value).strip()
    for member in enum_cls:
        if member.value.lower() == text.lower() or member.name.lower() == text.lower():
            return member
    alias = _VALUE_ALIASES.get(enum_cls, {}).get(text.lower())
    if alias is not None:
        return alias
    valid = ", ".join(m.value for m in enum_cls)
    raise ConfigError(f"Invalid value for {key}: {value!r} (expected one of: {valid})")


def _parse_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in {"true", "yes", "1"}:
        return True
    if text in {"false", "no", "0"}:
        return False
    raise ConfigError(f"Invalid boolean for {key}: {value!r}")


def parse_parameter_string(parameter: str) -> Dict[str, Any]:
    """
    Parse a protoc plugin parameter string into option keys.

    Parameters look like ``FileNaming=DropPath,Visibility=Public``.
    ``ImplementationOnlyImports`` and ``UseAccessLevelOnImports`` are boolean
    shorthands for ``import_directive``.

    Args:
        parameter: Raw parameter string (may be empty)

    Returns:
        Dictionary of option keys to raw values

    Raises:
        ConfigError: For unknown parameter names
    """
    values: Dict[str, Any] = {}
    if not parameter:
        return values

    for chunk in parameter.split(","):
        if not chunk.strip():
            continue
        key, _, value = chunk.partition("=")
        key = key.strip()
        value = value.strip()
        lowered = key.lower()

        if lowered == "implementationonlyimports":
            if _parse_bool(key, value):
                values["import_directive"] = ImportDirective.IMPLEMENTATION_ONLY
        elif lowered == "useaccesslevelonimports":
            if _parse_bool(key, value):
                values["import_directive"] = ImportDirective.ACCESS_LEVEL
        elif lowered in _PARAMETER_KEYS:
            option_key = _PARAMETER_KEYS[lowered]
            if option_key == "shorten_type_naming_files":
                values[option_key] = tuple(p for p in value.split(";") if p)
            else:
                values[option_key] = value
        else:
            raise ConfigError(f"Unknown generator parameter: {key}")

    return values


def load_module_mappings(path: Union[str, Path]) -> Dict[str, str]:
    """
    Load proto-file-to-module mappings from a JSON file.

    Expected shape::

        {"mapping": [{"module_name": "Foo", "proto_file_path": ["foo.proto"]}]}

    Args:
        path: Mappings file

    Returns:
        Dictionary mapping proto file path to module name

    Raises:
        ConfigError: If the file is missing, malformed, or maps one file twice
    """
    data = _load_json_object(path, "Module mappings file")
    entries = data.get("mapping", [])
    if not isinstance(entries, list):
        raise ConfigError(f"'mapping' must be a list in {path}")

    mappings: Dict[str, str] = {}
    for entry in entries:
        if not isinstance(entry, dict) or not entry.get("module_name"):
            raise ConfigError(f"Mapping entry without module_name in {path}")
        module = entry["module_name"]
        proto_paths = entry.get("proto_file_path", [])
        if isinstance(proto_paths, str):
            proto_paths = [proto_paths]
        for proto_path in proto_paths:
            existing = mappings.get(proto_path)
            if existing is not None and existing != module:
                raise ConfigError(
                    f"Duplicate proto file path '{proto_path}' mapped to "
                    f"'{existing}' and '{module}' in {path}"
                )
            mappings[proto_path] = module

    logger.debug("Loaded %d module mappings from %s", len(mappings), path)
    return mappings


def _load_json_object(path: Union[str, Path], what: str) -> Dict[str, Any]:
    path = Path(path)

    if not path.exists():
        raise ConfigError(f"{what} not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {str(e)}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read {path}: {str(e)}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{what} must contain a JSON object: {path}")
    return data


def options_from_dict(
    config: Mapping[str, Any], base: Optional[GeneratorOptions] = None
) -> GeneratorOptions:
    """
    Build GeneratorOptions from a dictionary of option keys.

    Args:
        config: Option keys and raw values
        base: Options to start from (defaults if None)

    Returns:
        New GeneratorOptions instance

    Raises:
        ConfigError: For unknown keys or invalid values
    """
    options = base or GeneratorOptions()
    updates: Dict[str, Any] = {}

    for key, value in config.items():
        if key in _ENUM_KEYS:
            updates[key] = _parse_enum(_ENUM_KEYS[key], key, value)
        elif key == "proto_to_module_mappings":
            if not isinstance(value, Mapping):
                raise ConfigError("proto_to_module_mappings must be an object")
            updates[key] = dict(value)
        elif key == "module_mappings_file":
            if value:
                updates["proto_to_module_mappings"] = load_module_mappings(value)
        elif key == "shorten_type_naming_files":
            if isinstance(value, str):
                value = [p for p in value.split(";") if p]
            updates[key] = tuple(value)
        elif key == "runtime_module_name":
            if not value or not str(value).isidentifier():
                raise ConfigError(f"Invalid runtime_module_name: {value!r}")
            updates[key] = str(value)
        else:
            raise ConfigError(f"Unknown configuration key: {key}")

    return replace(options, **updates)


def load_options(
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
    parameter: Optional[str] = None,
) -> GeneratorOptions:
    """
    Load generator options, merging every source.

    Precedence (later wins): defaults, ``config_file``, ``parameter``,
    ``custom_config``.

    Args:
        custom_config: Explicit option overrides
        config_file: Path to JSON configuration file
        parameter: protoc-style parameter string

    Returns:
        Merged GeneratorOptions
    """
    options = GeneratorOptions()

    if config_file:
        options = options_from_dict(
            _load_json_object(config_file, "Configuration file"), options
        )
        logger.debug("Applied configuration file %s", config_file)

    if parameter:
        options = options_from_dict(parse_parameter_string(parameter), options)

    if custom_config:
        options = options_from_dict(custom_config, options)

    return options


def save_options(options: GeneratorOptions, output_path: Union[str, Path]):
    """Save options to a JSON file readable by ``load_options``."""
    config_dict = {
        "output_naming": options.output_naming.value,
        "import_directive": options.import_directive.value,
        "visibility": options.visibility.value,
        "generation_mode": options.generation_mode.value,
        "proto_to_module_mappings": dict(options.proto_to_module_mappings),
        "shorten_type_naming_files": list(options.shorten_type_naming_files),
        "runtime_module_name": options.runtime_module_name,
    }

    try:
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(config_dict, f, indent=2, sort_keys=True)
    except OSError as e:
        raise ConfigError(f"Failed to save configuration to {output_path}: {str(e)}") from e
