"""
Descriptor model for one schema file.

Immutable, already-resolved view of a .proto file: its declarations,
typed options, dependencies and source comments. Built by the caller
(usually from the JSON descriptor format read by the CLI) and treated as
read-only by everything downstream.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

# Field numbers of FileDescriptorProto used to look up file-level comments
FILE_SYNTAX_FIELD = 12
FILE_EDITION_FIELD = 14

# Files whose generated code ships inside the runtime library itself
BUNDLED_PROTO_FILES = frozenset(
    {
        "google/protobuf/any.proto",
        "google/protobuf/api.proto",
        "google/protobuf/descriptor.proto",
        "google/protobuf/duration.proto",
        "google/protobuf/empty.proto",
        "google/protobuf/field_mask.proto",
        "google/protobuf/source_context.proto",
        "google/protobuf/struct.proto",
        "google/protobuf/timestamp.proto",
        "google/protobuf/type.proto",
        "google/protobuf/wrappers.proto",
    }
)


class DescriptorError(Exception):
    """Exception raised for malformed descriptor input."""

    pass


class FieldType(Enum):
    """Protobuf field types."""

    DOUBLE = "double"
    FLOAT = "float"
    INT64 = "int64"
    UINT64 = "uint64"
    INT32 = "int32"
    FIXED64 = "fixed64"
    FIXED32 = "fixed32"
    BOOL = "bool"
    STRING = "string"
    GROUP = "group"
    MESSAGE = "message"
    BYTES = "bytes"
    UINT32 = "uint32"
    ENUM = "enum"
    SFIXED32 = "sfixed32"
    SFIXED64 = "sfixed64"
    SINT32 = "sint32"
    SINT64 = "sint64"


class FieldLabel(Enum):
    """Field cardinality."""

    OPTIONAL = "optional"
    REQUIRED = "required"
    REPEATED = "repeated"


@dataclass(frozen=True)
class FieldDecl:
    """A field declared in a message."""

    name: str
    number: int
    type: FieldType
    label: FieldLabel = FieldLabel.OPTIONAL
    type_name: str = ""  # Fully qualified name for MESSAGE/ENUM/GROUP fields
    json_name: str = ""


@dataclass(frozen=True)
class EnumValueDecl:
    """A single enum case."""

    name: str
    number: int


@dataclass(frozen=True)
class EnumDecl:
    """An enum declaration."""

    name: str
    full_name: str
    values: Tuple[EnumValueDecl, ...] = ()


@dataclass(frozen=True)
class ExtensionDecl:
    """An extension field added to a message owned elsewhere."""

    name: str
    full_name: str
    number: int
    type: FieldType
    extendee: str
    label: FieldLabel = FieldLabel.OPTIONAL
    type_name: str = ""


@dataclass(frozen=True)
class MessageDecl:
    """A message declaration with its nested declarations."""

    name: str
    full_name: str
    fields: Tuple[FieldDecl, ...] = ()
    messages: Tuple["MessageDecl", ...] = ()
    enums: Tuple[EnumDecl, ...] = ()
    extensions: Tuple[ExtensionDecl, ...] = ()


@dataclass(frozen=True)
class FileOptions:
    """Typed subset of file options the generator reads."""

    swift_prefix: str = ""


@dataclass(frozen=True)
class SourceLocation:
    """Comments attached to one structural path of the file."""

    leading_comments: str = ""
    trailing_comments: str = ""
    leading_detached_comments: Tuple[str, ...] = ()

    def as_source_comment(
        self, comment_prefix: str, leading_detached_prefix: Optional[str] = None
    ) -> str:
        """
        Format the attached comments as source comment lines.

        Each detached block is prefixed with ``leading_detached_prefix`` and
        followed by a blank line; leading comment lines get ``comment_prefix``.
        Detached blocks are dropped when no detached prefix is given.

        Args:
            comment_prefix: Marker for leading comment lines (e.g. ``///``)
            leading_detached_prefix: Marker for detached comment lines

        Returns:
            Formatted comment text, empty if nothing is attached
        """
        result = []
        if leading_detached_prefix is not None:
            for detached in self.leading_detached_comments:
                result.append(_prefix_lines(detached, leading_detached_prefix))
                result.append("\n")
        if self.leading_comments:
            result.append(_prefix_lines(self.leading_comments, comment_prefix))
        return "".join(result)


def _prefix_lines(text: str, prefix: str) -> str:
    lines = text.split("\n")
    # Trailing newlines of a comment block produce no comment lines
    while lines and not lines[-1]:
        lines.pop()
    return "".join(f"{prefix}{line}\n" for line in lines)


@dataclass(frozen=True)
class Dependency:
    """An imported file, with the public imports it re-exports."""

    name: str
    public: bool = False
    public_dependencies: Tuple["Dependency", ...] = ()


@dataclass(frozen=True)
class SchemaFile:
    """Descriptor for one schema file."""

    name: str
    package: str = ""
    syntax: str = "proto3"
    edition: str = ""
    options: FileOptions = field(default_factory=FileOptions)
    enums: Tuple[EnumDecl, ...] = ()
    messages: Tuple[MessageDecl, ...] = ()
    extensions: Tuple[ExtensionDecl, ...] = ()
    dependencies: Tuple[Dependency, ...] = ()
    source_locations: Mapping[Tuple[int, ...], SourceLocation] = field(
        default_factory=dict, compare=False, hash=False
    )

    def comment_at(self, path: Tuple[int, ...]) -> Optional[SourceLocation]:
        """Return the comments attached to a structural field path, if any."""
        return self.source_locations.get(tuple(path))

    @property
    def defines_types(self) -> bool:
        """Whether the file declares any enum, message or extension."""
        return bool(self.enums or self.messages or self.extensions)

    @property
    def is_bundled_proto(self) -> bool:
        """Whether this file's generated code is part of the runtime itself."""
        return self.name in BUNDLED_PROTO_FILES

    @property
    def needs_foundation_import(self) -> bool:
        """Whether any declared field uses a type that needs Foundation (bytes)."""
        if any(ext.type == FieldType.BYTES for ext in self.extensions):
            return True
        return any(_message_uses_bytes(message) for message in self.iter_messages())

    def iter_messages(self) -> Iterator[MessageDecl]:
        """Iterate all messages, nested ones included, in declaration order."""
        for message in self.messages:
            yield from _walk_messages(message)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SchemaFile":
        """
        Build a SchemaFile from its JSON descriptor form.

        Args:
            data: Parsed JSON object describing one file

        Returns:
            SchemaFile instance

        Raises:
            DescriptorError: If required keys are missing or values are invalid
        """
        if not isinstance(data, dict):
            raise DescriptorError("File descriptor must be a JSON object")
        name = data.get("name")
        if not name or not isinstance(name, str):
            raise DescriptorError("File descriptor is missing 'name'")

        package = data.get("package", "")
        scope = package
        try:
            options = data.get("options") or {}
            return cls(
                name=name,
                package=package,
                syntax=data.get("syntax", "proto3"),
                edition=data.get("edition", ""),
                options=FileOptions(swift_prefix=options.get("swift_prefix", "")),
                enums=tuple(_enum_from_dict(e, scope) for e in data.get("enums", [])),
                messages=tuple(
                    _message_from_dict(m, scope) for m in data.get("messages", [])
                ),
                extensions=tuple(
                    _extension_from_dict(x, scope) for x in data.get("extensions", [])
                ),
                dependencies=tuple(
                    _dependency_from_dict(d) for d in data.get("dependencies", [])
                ),
                source_locations={
                    tuple(loc["path"]): SourceLocation(
                        leading_comments=loc.get("leading_comments", ""),
                        trailing_comments=loc.get("trailing_comments", ""),
                        leading_detached_comments=tuple(
                            loc.get("leading_detached_comments", [])
                        ),
                    )
                    for loc in data.get("source_locations", [])
                },
            )
        except DescriptorError as e:
            raise DescriptorError(f"{name}: {e}") from e
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise DescriptorError(f"{name}: invalid descriptor: {e}") from e


def _walk_messages(message: MessageDecl) -> Iterator[MessageDecl]:
    yield message
    for nested in message.messages:
        yield from _walk_messages(nested)


def _message_uses_bytes(message: MessageDecl) -> bool:
    return any(f.type == FieldType.BYTES for f in message.fields) or any(
        x.type == FieldType.BYTES for x in message.extensions
    )


def _qualify(scope: str, name: str) -> str:
    return f"{scope}.{name}" if scope else name


def _require(data: Dict[str, Any], key: str, kind: str) -> Any:
    if key not in data:
        raise DescriptorError(f"{kind} is missing '{key}'")
    return data[key]


def _field_type(value: str) -> FieldType:
    try:
        return FieldType(value.lower())
    except ValueError:
        raise DescriptorError(f"Unknown field type: {value}")


def _field_label(value: str) -> FieldLabel:
    try:
        return FieldLabel(value.lower())
    except ValueError:
        raise DescriptorError(f"Unknown field label: {value}")


def _enum_from_dict(data: Dict[str, Any], scope: str) -> EnumDecl:
    name = _require(data, "name", "Enum")
    return EnumDecl(
        name=name,
        full_name=data.get("full_name") or _qualify(scope, name),
        values=tuple(
            EnumValueDecl(
                name=_require(v, "name", f"Enum value of {name}"),
                number=int(_require(v, "number", f"Enum value of {name}")),
            )
            for v in data.get("values", [])
        ),
    )


def _extension_from_dict(data: Dict[str, Any], scope: str) -> ExtensionDecl:
    name = _require(data, "name", "Extension")
    return ExtensionDecl(
        name=name,
        full_name=data.get("full_name") or _qualify(scope, name),
        number=int(_require(data, "number", f"Extension {name}")),
        type=_field_type(_require(data, "type", f"Extension {name}")),
        extendee=_require(data, "extendee", f"Extension {name}").lstrip("."),
        label=_field_label(data.get("label", "optional")),
        type_name=data.get("type_name", "").lstrip("."),
    )


def _message_from_dict(data: Dict[str, Any], scope: str) -> MessageDecl:
    name = _require(data, "name", "Message")
    full_name = data.get("full_name") or _qualify(scope, name)
    fields: List[FieldDecl] = []
    for f in data.get("fields", []):
        field_name = _require(f, "name", f"Field of {name}")
        fields.append(
            FieldDecl(
                name=field_name,
                number=int(_require(f, "number", f"Field {name}.{field_name}")),
                type=_field_type(_require(f, "type", f"Field {name}.{field_name}")),
                label=_field_label(f.get("label", "optional")),
                type_name=f.get("type_name", "").lstrip("."),
                json_name=f.get("json_name", ""),
            )
        )
    return MessageDecl(
        name=name,
        full_name=full_name,
        fields=tuple(fields),
        messages=tuple(
            _message_from_dict(m, full_name) for m in data.get("messages", [])
        ),
        enums=tuple(_enum_from_dict(e, full_name) for e in data.get("enums", [])),
        extensions=tuple(
            _extension_from_dict(x, full_name) for x in data.get("extensions", [])
        ),
    )


def _dependency_from_dict(data: Any) -> Dependency:
    if isinstance(data, str):
        return Dependency(name=data)
    return Dependency(
        name=_require(data, "name", "Dependency"),
        public=bool(data.get("public", False)),
        public_dependencies=tuple(
            _dependency_from_dict(d) for d in data.get("public_dependencies", [])
        ),
    )
