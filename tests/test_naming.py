"""Path, identifier and Swift name resolution tests."""

from __future__ import annotations

import pytest

from swift_protogen.codegen.core.descriptor import FileOptions, SchemaFile
from swift_protogen.codegen.core.naming import (
    NameResolver,
    is_valid_identifier,
    quote_if_reserved,
    split_path,
    to_lower_camel,
    to_upper_camel,
    type_prefix,
)


@pytest.mark.parametrize(
    "path, expected",
    [
        ("a/b/c.proto", ("a/b/", "c", ".proto")),
        ("c.proto", ("", "c", ".proto")),
        ("dir/noext", ("dir/", "noext", "")),
        ("a.b/c.d.proto", ("a.b/", "c.d", ".proto")),
        ("dir/.hidden", ("dir/", ".hidden", "")),
    ],
)
def test_split_path(path: str, expected: tuple) -> None:
    assert split_path(path) == expected
    assert "".join(split_path(path)) == path


@pytest.mark.parametrize(
    "text, valid",
    [
        ("Foo_", True),
        ("_private", True),
        ("valid_Name", True),
        ("", False),
        ("1abc", False),
        ("has space", False),
        ("dash-ed", False),
        ("`Foo`", False),
        ("Foo\n", False),
    ],
)
def test_is_valid_identifier(text: str, valid: bool) -> None:
    assert is_valid_identifier(text) is valid


def test_is_valid_identifier_allows_quoted_when_asked() -> None:
    assert is_valid_identifier("`Foo`", allow_quoted=True)
    assert not is_valid_identifier("``", allow_quoted=True)


def test_case_helpers() -> None:
    assert to_upper_camel("foo_bar") == "FooBar"
    assert to_upper_camel("FOO_BAR") == "FooBar"
    assert to_upper_camel("fooBar") == "FooBar"
    assert to_lower_camel("foo_bar") == "fooBar"
    assert to_lower_camel("URLPath") == "urlPath"
    assert to_lower_camel("RED") == "red"


def test_quote_if_reserved() -> None:
    assert quote_if_reserved("class") == "`class`"
    assert quote_if_reserved("klass") == "klass"


def test_type_prefix() -> None:
    assert type_prefix("foo.bar_baz") == "Foo_BarBaz_"
    assert type_prefix("") == ""
    assert type_prefix("foo.bar", swift_prefix="XY") == "XY"


def test_resolver_names_local_types(sample_file: SchemaFile) -> None:
    resolver = NameResolver(sample_file)
    color, person = sample_file.enums[0], sample_file.messages[0]

    assert resolver.relative_name(color) == "Foo_Bar_Color"
    assert resolver.relative_name(person) == "Foo_Bar_Person"
    assert resolver.relative_name(person, shorten=True) == "Person"


def test_resolver_names_nested_types(build) -> None:
    inner_enum = build.enum("Kind", "pkg.Outer")
    inner = build.message("Inner", "pkg.Outer")
    outer = build.message("Outer", "pkg", messages=(inner,), enums=(inner_enum,))
    resolver = NameResolver(SchemaFile(name="o.proto", package="pkg", messages=(outer,)))

    assert resolver.swift_type_name("pkg.Outer.Inner") == "Pkg_Outer.Inner"
    assert resolver.swift_type_name(".pkg.Outer.Kind") == "Pkg_Outer.Kind"
    assert resolver.swift_type_name("pkg.Outer.Inner", shorten=True) == "Outer.Inner"


def test_resolver_derives_foreign_names() -> None:
    resolver = NameResolver(SchemaFile(name="x.proto", package="mine"))

    assert resolver.swift_type_name("other.pkg.Thing") == "Other_Pkg_Thing"
    assert resolver.swift_type_name("other.Thing.Nested") == "Other_Thing.Nested"
    assert resolver.swift_type_name("Bare") == "Bare"


def test_resolver_honours_swift_prefix() -> None:
    file = SchemaFile(
        name="x.proto", package="foo", options=FileOptions(swift_prefix="XY")
    )
    assert NameResolver(file).type_prefix == "XY"


def test_enum_case_name_strips_enum_prefix(sample_file: SchemaFile) -> None:
    resolver = NameResolver(sample_file)
    color = sample_file.enums[0]

    assert resolver.enum_case_name(color, "COLOR_RED") == "red"
    assert resolver.enum_case_name(color, "COLOR_1") == "color1"
    assert resolver.enum_case_name(color, "DEFAULT") == "`default`"


def test_runtime_module_prefix_is_empty_for_bundled_files() -> None:
    bundled = NameResolver(SchemaFile(name="google/protobuf/timestamp.proto"))
    regular = NameResolver(SchemaFile(name="mine.proto"), runtime_module_name="Proto")

    assert bundled.runtime_module_prefix == ""
    assert regular.runtime_module_prefix == "Proto."


def test_module_lookup() -> None:
    resolver = NameResolver(
        SchemaFile(name="a.proto"),
        proto_to_module_mappings={"a.proto": "ModA", "b.proto": "ModB"},
    )
    assert resolver.current_module == "ModA"
    assert resolver.module_for("b.proto") == "ModB"
    assert resolver.module_for("c.proto") is None


def test_extension_names(build) -> None:
    holder = build.message("Holder", "pkg")
    resolver = NameResolver(SchemaFile(name="e.proto", package="pkg", messages=(holder,)))

    assert resolver.extension_name("pkg.my_ext") == "Pkg_myExt"
    assert resolver.extension_name("pkg.Holder.inner_ext") == "Pkg_Holder_innerExt"
    assert resolver.extension_scope("pkg.Holder.inner_ext", shorten=True) == "Holder_"
