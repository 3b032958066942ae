"""Template engine tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from swift_protogen.codegen.core.templates import (
    TemplateEngine,
    TemplateError,
    create_template_engine,
)
from swift_protogen.codegen.swift.emitters import TEMPLATE_DIR


def _engine_with(tmp_path: Path, name: str, source: str) -> TemplateEngine:
    (tmp_path / name).write_text(source, encoding="utf-8")
    return TemplateEngine(tmp_path)


def test_engines_are_cached_per_directory() -> None:
    assert create_template_engine(TEMPLATE_DIR) is create_template_engine(TEMPLATE_DIR)


def test_version_check_template() -> None:
    rendered = create_template_engine(TEMPLATE_DIR).render_template(
        "version_check.swift.j2",
        {"prefix": "SwiftProtobuf.", "runtime_module": "SwiftProtobuf", "version": 2},
    )
    assert rendered.endswith(
        "fileprivate struct _GeneratedWithProtocGenSwiftVersion: "
        "SwiftProtobuf.ProtobufAPIVersionCheck {\n"
        "  struct _2: SwiftProtobuf.ProtobufAPIVersion_2 {}\n"
        "  typealias Version = _2\n"
        "}"
    )


def test_output_is_not_escaped(tmp_path: Path) -> None:
    engine = _engine_with(tmp_path, "t.j2", "{{ t }}")
    assert engine.render_template("t.j2", {"t": "Array<Int> & \"x\""}) == 'Array<Int> & "x"'


def test_undefined_variables_raise(tmp_path: Path) -> None:
    engine = _engine_with(tmp_path, "t.j2", "{{ missing }}")
    with pytest.raises(TemplateError, match="Failed to render template t.j2"):
        engine.render_template("t.j2", {})


def test_missing_template_raises() -> None:
    with pytest.raises(TemplateError, match="missing.swift.j2"):
        create_template_engine(TEMPLATE_DIR).render_template("missing.swift.j2", {})


def test_swift_string_filter_escapes_literals(tmp_path: Path) -> None:
    engine = _engine_with(tmp_path, "s.j2", '"{{ s | swift_string }}"')
    assert engine.render_template("s.j2", {"s": 'a"b\\c\nd'}) == '"a\\"b\\\\c\\nd"'


def test_enum_runtime_escapes_proto_names() -> None:
    rendered = create_template_engine(TEMPLATE_DIR).render_template(
        "enum_runtime.swift.j2",
        {
            "name": "E",
            "cases": [{"number": 0, "proto_name": 'ODD"NAME'}],
            "visibility": "",
            "prefix": "SwiftProtobuf.",
        },
    )
    assert '    0: .same(proto: "ODD\\"NAME"),' in rendered
