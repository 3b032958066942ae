"""
Swift type mapping for proto fields and extensions.
"""

from dataclasses import dataclass

from ..core.descriptor import ExtensionDecl, FieldDecl, FieldLabel, FieldType
from ..core.naming import NameResolver

# FieldType -> (Swift storage type, default value expression, runtime codec type)
_SCALARS = {
    FieldType.DOUBLE: ("Double", "0", "ProtobufDouble"),
    FieldType.FLOAT: ("Float", "0", "ProtobufFloat"),
    FieldType.INT64: ("Int64", "0", "ProtobufInt64"),
    FieldType.UINT64: ("UInt64", "0", "ProtobufUInt64"),
    FieldType.INT32: ("Int32", "0", "ProtobufInt32"),
    FieldType.FIXED64: ("UInt64", "0", "ProtobufFixed64"),
    FieldType.FIXED32: ("UInt32", "0", "ProtobufFixed32"),
    FieldType.BOOL: ("Bool", "false", "ProtobufBool"),
    FieldType.STRING: ("String", "String()", "ProtobufString"),
    FieldType.BYTES: ("Data", "Data()", "ProtobufBytes"),
    FieldType.UINT32: ("UInt32", "0", "ProtobufUInt32"),
    FieldType.SFIXED32: ("Int32", "0", "ProtobufSFixed32"),
    FieldType.SFIXED64: ("Int64", "0", "ProtobufSFixed64"),
    FieldType.SINT32: ("Int32", "0", "ProtobufSInt32"),
    FieldType.SINT64: ("Int64", "0", "ProtobufSInt64"),
}


@dataclass(frozen=True)
class SwiftType:
    """A mapped Swift type with its declaration metadata."""

    name: str
    default_value: str
    is_optional: bool = False
    is_repeated: bool = False

    @property
    def declaration(self) -> str:
        """Type as written in a stored property declaration."""
        if self.is_repeated:
            return f"[{self.name}]"
        if self.is_optional:
            return f"{self.name}?"
        return self.name

    @property
    def initial_value(self) -> str:
        if self.is_repeated:
            return "[]"
        if self.is_optional:
            return "nil"
        return self.default_value


class SwiftTypeMapper:
    """Maps proto field types to Swift types for one file."""

    def __init__(self, resolver: NameResolver, shorten_naming: bool = False):
        self.resolver = resolver
        self.shorten_naming = shorten_naming

    def map_field(self, field: FieldDecl) -> SwiftType:
        repeated = field.label == FieldLabel.REPEATED
        if field.type in _SCALARS:
            name, default, _ = _SCALARS[field.type]
            return SwiftType(name=name, default_value=default, is_repeated=repeated)

        type_name = self.resolver.swift_type_name(field.type_name, self.shorten_naming)
        if field.type == FieldType.ENUM:
            return SwiftType(
                name=type_name, default_value=".init()", is_repeated=repeated
            )
        # Messages and groups have presence
        return SwiftType(
            name=type_name,
            default_value=f"{type_name}()",
            is_optional=not repeated,
            is_repeated=repeated,
        )

    def extension_field_type(self, extension: ExtensionDecl) -> str:
        """Runtime extension field wrapper, e.g. ``OptionalExtensionField<ProtobufInt32>``."""
        prefix = self.resolver.runtime_module_prefix
        cardinality = "Repeated" if extension.label == FieldLabel.REPEATED else "Optional"

        if extension.type in _SCALARS:
            codec = _SCALARS[extension.type][2]
            return f"{prefix}{cardinality}ExtensionField<{prefix}{codec}>"

        type_name = self.resolver.swift_type_name(extension.type_name, self.shorten_naming)
        kind = {
            FieldType.ENUM: "Enum",
            FieldType.GROUP: "Group",
            FieldType.MESSAGE: "Message",
        }[extension.type]
        return f"{prefix}{cardinality}{kind}ExtensionField<{type_name}>"

    def extension_value_type(self, extension: ExtensionDecl) -> SwiftType:
        """Swift type returned by an extension accessor."""
        as_field = FieldDecl(
            name=extension.name,
            number=extension.number,
            type=extension.type,
            label=extension.label,
            type_name=extension.type_name,
        )
        return self.map_field(as_field)
