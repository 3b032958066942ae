"""Generator option loading tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from swift_protogen.codegen.core.config import (
    ConfigError,
    GenerationMode,
    GeneratorOptions,
    ImportDirective,
    OutputNaming,
    Visibility,
    load_module_mappings,
    load_options,
    options_from_dict,
    parse_parameter_string,
    save_options,
)


def _write_json(path: Path, data) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_defaults() -> None:
    options = GeneratorOptions()
    assert options.output_naming == OutputNaming.FULL_PATH
    assert options.visibility == Visibility.FILE_LOCAL
    assert options.visibility_prefix == ""
    assert not options.is_lite_mode
    assert options.runtime_module_name == "SwiftProtobuf"


def test_parse_parameter_string() -> None:
    values = parse_parameter_string(
        "FileNaming=DropPath, Visibility=Public,ShortenTypeNamingFiles=a/;b/,"
        "ImplementationOnlyImports=true"
    )
    assert values == {
        "output_naming": "DropPath",
        "visibility": "Public",
        "shorten_type_naming_files": ("a/", "b/"),
        "import_directive": ImportDirective.IMPLEMENTATION_ONLY,
    }


def test_parse_parameter_string_rejects_unknown_keys() -> None:
    with pytest.raises(ConfigError, match="Unknown generator parameter: Bogus"):
        parse_parameter_string("Bogus=1")


def test_access_level_import_snippets() -> None:
    values = parse_parameter_string("UseAccessLevelOnImports=true")
    directive = values["import_directive"]
    assert directive == ImportDirective.ACCESS_LEVEL
    assert directive.snippet == "internal import"
    assert ImportDirective.PLAIN.snippet == "import"


def test_options_from_dict_parses_enum_spellings() -> None:
    options = options_from_dict(
        {
            "output_naming": "path_to_underscores",
            "visibility": "public",
            "generation_mode": "LITE",
        }
    )
    assert options.output_naming == OutputNaming.PATH_TO_UNDERSCORES
    assert options.visibility_prefix == "public "
    assert options.generation_mode == GenerationMode.LITE


def test_options_from_dict_errors() -> None:
    with pytest.raises(ConfigError, match="Invalid value for visibility"):
        options_from_dict({"visibility": "Protected"})
    with pytest.raises(ConfigError, match="Unknown configuration key"):
        options_from_dict({"colour": "red"})
    with pytest.raises(ConfigError, match="Invalid runtime_module_name"):
        options_from_dict({"runtime_module_name": "not a module"})


def test_load_module_mappings(tmp_path: Path) -> None:
    path = _write_json(
        tmp_path / "mappings.json",
        {
            "mapping": [
                {"module_name": "Common", "proto_file_path": ["a.proto", "b.proto"]},
                {"module_name": "Extra", "proto_file_path": "c.proto"},
            ]
        },
    )
    assert load_module_mappings(path) == {
        "a.proto": "Common",
        "b.proto": "Common",
        "c.proto": "Extra",
    }


def test_load_module_mappings_rejects_conflicts(tmp_path: Path) -> None:
    path = _write_json(
        tmp_path / "mappings.json",
        {
            "mapping": [
                {"module_name": "One", "proto_file_path": ["a.proto"]},
                {"module_name": "Two", "proto_file_path": ["a.proto"]},
            ]
        },
    )
    with pytest.raises(ConfigError, match="Duplicate proto file path 'a.proto'"):
        load_module_mappings(path)


def test_load_options_precedence(tmp_path: Path) -> None:
    config = _write_json(
        tmp_path / "config.json",
        {"output_naming": "FullPath", "visibility": "Public", "generation_mode": "lite"},
    )

    options = load_options(
        custom_config={"generation_mode": GenerationMode.FULL},
        config_file=config,
        parameter="FileNaming=DropPath",
    )
    assert options.output_naming == OutputNaming.DROP_PATH
    assert options.visibility == Visibility.PUBLIC
    assert options.generation_mode == GenerationMode.FULL


def test_load_options_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_options(config_file=tmp_path / "absent.json")


def test_save_options_round_trips(tmp_path: Path) -> None:
    options = GeneratorOptions(
        visibility=Visibility.PUBLIC,
        proto_to_module_mappings={"a.proto": "ModA"},
        shorten_type_naming_files=("lite/",),
    )
    path = tmp_path / "saved.json"
    save_options(options, path)

    assert load_options(config_file=path) == options
