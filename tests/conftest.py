from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

import pytest

from swift_protogen.codegen.core.descriptor import (
    EnumDecl,
    EnumValueDecl,
    ExtensionDecl,
    FieldDecl,
    FieldLabel,
    FieldType,
    MessageDecl,
    SchemaFile,
)
from swift_protogen.codegen.core.generator import DeclarationEmitter, DeclarationFailure


def qualify(package: str, name: str) -> str:
    return f"{package}.{name}" if package else name


def make_enum(name: str, package: str = "", values: Iterable[str] = ("ZERO",)) -> EnumDecl:
    return EnumDecl(
        name=name,
        full_name=qualify(package, name),
        values=tuple(EnumValueDecl(v, i) for i, v in enumerate(values)),
    )


def make_message(name: str, package: str = "", fields=(), **kwargs) -> MessageDecl:
    return MessageDecl(name=name, full_name=qualify(package, name), fields=tuple(fields), **kwargs)


def make_extension(name: str, extendee: str, package: str = "", number: int = 100) -> ExtensionDecl:
    return ExtensionDecl(
        name=name,
        full_name=qualify(package, name),
        number=number,
        type=FieldType.STRING,
        extendee=extendee,
    )


@pytest.fixture
def sample_file() -> SchemaFile:
    """A file with an enum, a message using several field kinds, and an extension."""
    package = "foo.bar"
    color = EnumDecl(
        name="Color",
        full_name="foo.bar.Color",
        values=(EnumValueDecl("COLOR_RED", 0), EnumValueDecl("COLOR_GREEN", 1)),
    )
    person = make_message(
        "Person",
        package,
        fields=[
            FieldDecl("name", 1, FieldType.STRING),
            FieldDecl("id", 2, FieldType.INT32),
            FieldDecl("photo", 3, FieldType.BYTES),
            FieldDecl("color", 4, FieldType.ENUM, type_name="foo.bar.Color"),
            FieldDecl(
                "friends",
                5,
                FieldType.MESSAGE,
                label=FieldLabel.REPEATED,
                type_name="foo.bar.Person",
            ),
        ],
    )
    return SchemaFile(
        name="a/b/sample.proto",
        package=package,
        enums=(color,),
        messages=(person,),
        extensions=(make_extension("nickname", "foo.bar.Person", package),),
    )


@dataclass
class FakeEmitters:
    """Recording stand-ins for the enum, message and extension emitters."""

    events: list = field(default_factory=list)
    failing: set = field(default_factory=set)

    def classes(self) -> dict:
        events = self.events
        failing = self.failing

        class FakeEnum(DeclarationEmitter):
            def __init__(self, descriptor, options, resolver, shorten_naming=False):
                self.descriptor = descriptor
                events.append(("new-enum", descriptor.name, shorten_naming))

            def generate_declaration(self, printer):
                events.append(("declare", self.descriptor.name))
                printer.print(f"DECL {self.descriptor.name}")

            def generate_runtime_support(self, printer, file_generator):
                events.append(("support", self.descriptor.name))
                printer.print(f"SUPPORT {self.descriptor.name}")

        class FakeMessage(DeclarationEmitter):
            def __init__(self, descriptor, options, resolver, extension_set, shorten_naming=False):
                self.descriptor = descriptor
                events.append(("new-message", descriptor.name, shorten_naming))

            def generate_declaration(self, printer):
                events.append(("declare", self.descriptor.name))
                if self.descriptor.name in failing:
                    raise DeclarationFailure(f"cannot declare {self.descriptor.name}")
                printer.print(f"DECL {self.descriptor.name}")

            def generate_runtime_support(self, printer, file_generator):
                events.append(("support", self.descriptor.name))
                printer.print(f"SUPPORT {self.descriptor.name}")

        class FakeExtensionSet:
            def __init__(self, file, options, resolver):
                self.extensions = []
                events.append(("new-extension-set",))

            def add(self, extensions):
                self.extensions.extend(extensions)

            @property
            def is_empty(self):
                return not self.extensions

            def generate_message_extensions(self, printer):
                printer.print("EXT ACCESSORS")

            def generate_file_registry(self, printer):
                printer.print("EXT REGISTRY")

            def generate_extension_declarations(self, printer):
                printer.print("EXT DECLS")

        return {
            "enum_generator_class": FakeEnum,
            "message_generator_class": FakeMessage,
            "extension_set_class": FakeExtensionSet,
        }

    @property
    def constructed(self) -> list:
        return [e for e in self.events if e[0].startswith("new-")]


@pytest.fixture
def fake_emitters() -> FakeEmitters:
    return FakeEmitters()


@pytest.fixture
def build():
    """Descriptor builders: ``build.enum``, ``build.message``, ``build.extension``."""

    class Builders:
        enum = staticmethod(make_enum)
        message = staticmethod(make_message)
        extension = staticmethod(make_extension)

    return Builders
