"""
Swift sub-emitters for enums, messages and file extensions.

Each emitter writes its declaration and, in full mode, its runtime
support code into the shared printer.
"""

import re
from pathlib import Path
from typing import Any, Dict, Iterable, List

from ..core.config import GeneratorOptions
from ..core.descriptor import (
    EnumDecl,
    ExtensionDecl,
    FieldLabel,
    FieldType,
    MessageDecl,
    SchemaFile,
)
from ..core.generator import DeclarationEmitter, DeclarationFailure
from ..core.naming import NameResolver, split_path, to_upper_camel
from ..core.printer import CodePrinter
from ..core.templates import create_template_engine
from .types import SwiftTypeMapper

TEMPLATE_DIR = Path(__file__).parent / "templates"


class _SwiftEmitter:
    """Shared template plumbing for the Swift emitters."""

    def __init__(self, options: GeneratorOptions, resolver: NameResolver):
        self.options = options
        self.resolver = resolver
        self.template_engine = create_template_engine(TEMPLATE_DIR)

    def _render(self, template_name: str, **context: Any) -> str:
        context.setdefault("visibility", self.options.visibility_prefix)
        context.setdefault("prefix", self.resolver.runtime_module_prefix)
        context.setdefault("runtime_module", self.resolver.runtime_module_name)
        return self.template_engine.render_template(template_name, context).rstrip(
            "\n"
        )


class EnumGenerator(_SwiftEmitter, DeclarationEmitter):
    """Emits one enum."""

    def __init__(
        self,
        descriptor: EnumDecl,
        options: GeneratorOptions,
        resolver: NameResolver,
        shorten_naming: bool = False,
    ):
        super().__init__(options, resolver)
        self.descriptor = descriptor
        self.shorten_naming = shorten_naming
        self.swift_name = resolver.relative_name(descriptor, shorten_naming)
        self.cases = self._build_cases()

    def _build_cases(self) -> List[Dict[str, Any]]:
        # Aliased numbers only get their first case
        cases = []
        seen = set()
        for value in self.descriptor.values:
            if value.number in seen:
                continue
            seen.add(value.number)
            cases.append(
                {
                    "name": self.resolver.enum_case_name(self.descriptor, value.name),
                    "number": value.number,
                    "proto_name": value.name,
                }
            )
        return cases

    def _context(self) -> Dict[str, Any]:
        # Short name inside its own body; nested names are dotted
        return {
            "name": self.swift_name.rpartition(".")[2],
            "cases": self.cases,
            "default_case": self.cases[0]["name"] if self.cases else "UNRECOGNIZED(0)",
            "lite": self.options.is_lite_mode,
        }

    def generate_declaration(self, printer: CodePrinter):
        printer.print()
        printer.print(self._render("enum.swift.j2", **self._context()))

    def generate_runtime_support(self, printer: CodePrinter, file_generator: Any):
        printer.print()
        printer.print(
            self._render(
                "enum_runtime.swift.j2", name=self.swift_name, cases=self.cases
            )
        )


class MessageGenerator(_SwiftEmitter, DeclarationEmitter):
    """
    Emits one message and everything nested in it.

    Extensions declared inside the message (at any depth) are registered
    with the file's extension set on construction.
    """

    def __init__(
        self,
        descriptor: MessageDecl,
        options: GeneratorOptions,
        resolver: NameResolver,
        extension_set: "ExtensionSetGenerator",
        shorten_naming: bool = False,
    ):
        super().__init__(options, resolver)
        self.descriptor = descriptor
        self.extension_set = extension_set
        self.shorten_naming = shorten_naming
        self.swift_name = resolver.relative_name(descriptor, shorten_naming)
        self.type_mapper = SwiftTypeMapper(resolver, shorten_naming)

        extension_set.add(descriptor.extensions)

        self.enums = [
            EnumGenerator(e, options, resolver, shorten_naming) for e in descriptor.enums
        ]
        self.messages = [
            MessageGenerator(m, options, resolver, extension_set, shorten_naming)
            for m in descriptor.messages
        ]

    def _field_context(self) -> List[Dict[str, Any]]:
        fields = []
        seen: Dict[str, str] = {}
        for field in self.descriptor.fields:
            if field.type in (FieldType.MESSAGE, FieldType.ENUM, FieldType.GROUP):
                if not field.type_name:
                    raise DeclarationFailure(
                        f"{self.resolver.file.name}: field '{self.descriptor.full_name}."
                        f"{field.name}' has no type name."
                    )

            prop = self.resolver.property_name(field.name)
            if prop in seen:
                raise DeclarationFailure(
                    f"{self.resolver.file.name}: fields '{seen[prop]}' and "
                    f"'{field.name}' of '{self.descriptor.full_name}' both map to "
                    f"the Swift property '{prop}'."
                )
            seen[prop] = field.name

            swift_type = self.type_mapper.map_field(field)
            fields.append(
                {
                    "property": prop,
                    "declaration": swift_type.declaration,
                    "initial": swift_type.initial_value,
                    "number": field.number,
                    "proto_name": field.name,
                    "name_kind": "same" if prop == field.name else "standard",
                }
            )
        return fields

    def generate_declaration(self, printer: CodePrinter):
        fields = self._field_context()

        printer.print()
        printer.print(
            self._render(
                "message.swift.j2",
                name=self.swift_name.rpartition(".")[2],
                fields=fields,
                lite=self.options.is_lite_mode,
            )
        )
        with printer.indented():
            for enum in self.enums:
                enum.generate_declaration(printer)
            for message in self.messages:
                message.generate_declaration(printer)
        printer.print()
        printer.print_indented(f"{self.options.visibility_prefix}init() {{}}")
        printer.print("}")

    def generate_runtime_support(self, printer: CodePrinter, file_generator: Any):
        printer.print()
        printer.print(
            self._render(
                "message_runtime.swift.j2",
                name=self.swift_name,
                proto_message_name=self._proto_message_name(),
                fields=self._field_context(),
            )
        )
        for enum in self.enums:
            enum.generate_runtime_support(printer, file_generator)
        for message in self.messages:
            message.generate_runtime_support(printer, file_generator)

    def _proto_message_name(self) -> str:
        parent, _, name = self.swift_name.rpartition(".")
        if parent:
            return f'{parent}.protoMessageName + ".{self.descriptor.name}"'
        if self.resolver.file.package:
            return f'_protobuf_package + ".{self.descriptor.name}"'
        return f'"{self.descriptor.name}"'


class ExtensionSetGenerator:
    """Collects every extension declared in a file and emits their support code."""

    def __init__(
        self,
        file: SchemaFile,
        options: GeneratorOptions,
        resolver: NameResolver,
    ):
        self.file = file
        self.options = options
        self.resolver = resolver
        self.type_mapper = SwiftTypeMapper(resolver)
        self.template_engine = create_template_engine(TEMPLATE_DIR)
        self._extensions: Dict[str, ExtensionDecl] = {}

    def add(self, extensions: Iterable[ExtensionDecl]):
        """Register extensions, keeping first-seen order."""
        for extension in extensions:
            self._extensions.setdefault(extension.full_name, extension)

    @property
    def is_empty(self) -> bool:
        return not self._extensions

    @property
    def registry_name(self) -> str:
        # File names may hold characters Swift identifiers can't
        base = re.sub(r"[^A-Za-z0-9_]", "_", split_path(self.file.name)[1])
        name = f"{self.resolver.type_prefix}{to_upper_camel(base)}_Extensions"
        return name if not name[0].isdigit() else f"_{name}"

    def _extension_context(self) -> List[Dict[str, Any]]:
        result = []
        for ext in self._extensions.values():
            value_type = self.type_mapper.extension_value_type(ext)
            property_name = self.resolver.extension_name(ext.full_name)
            result.append(
                {
                    "property": property_name,
                    "property_suffix": property_name[0].upper() + property_name[1:],
                    "decl_name": (
                        self.resolver.extension_scope(ext.full_name)
                        + "Extensions_"
                        + ext.full_name.rpartition(".")[2]
                    ),
                    "value_type": value_type.declaration.rstrip("?"),
                    "default_value": value_type.default_value
                    if not value_type.is_repeated
                    else "[]",
                    "repeated": ext.label == FieldLabel.REPEATED,
                    "field_type": self.type_mapper.extension_field_type(ext),
                    "extendee": self.resolver.swift_type_name(ext.extendee),
                    "number": ext.number,
                    "full_name": ext.full_name,
                }
            )
        return result

    def _render(self, template_name: str, **context: Any) -> str:
        context.setdefault("visibility", self.options.visibility_prefix)
        context.setdefault("prefix", self.resolver.runtime_module_prefix)
        return self.template_engine.render_template(template_name, context).rstrip(
            "\n"
        )

    def generate_message_extensions(self, printer: CodePrinter):
        """Accessor properties on each extended message."""
        groups: Dict[str, List[Dict[str, Any]]] = {}
        for ext in self._extension_context():
            groups.setdefault(ext["extendee"], []).append(ext)

        printer.print()
        printer.print(
            self._render(
                "extension_properties.swift.j2",
                groups=[
                    {"extendee": extendee, "extensions": exts}
                    for extendee, exts in groups.items()
                ],
            )
        )

    def generate_file_registry(self, printer: CodePrinter):
        """The per-file extension map."""
        printer.print()
        printer.print(
            self._render(
                "extension_registry.swift.j2",
                registry_name=self.registry_name,
                extensions=self._extension_context(),
            )
        )

    def generate_extension_declarations(self, printer: CodePrinter):
        """The extension objects the accessors and registry refer to."""
        printer.print()
        printer.print(
            self._render(
                "extension_declarations.swift.j2",
                extensions=self._extension_context(),
            )
        )
