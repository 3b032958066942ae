"""
Naming utilities for safe code generation.

Handles path splitting, identifier validation, case conversion and the
per-file name resolver that turns proto names into Swift names.
"""

import re
from typing import Dict, Mapping, Optional, Set, Tuple

from .descriptor import EnumDecl, MessageDecl, SchemaFile

_IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

SWIFT_RESERVED_WORDS: Set[str] = {
    "associatedtype", "class", "deinit", "enum", "extension", "fileprivate",
    "func", "import", "init", "inout", "internal", "let", "open", "operator",
    "private", "precedencegroup", "protocol", "public", "rethrows", "static",
    "struct", "subscript", "typealias", "var", "break", "case", "catch",
    "continue", "default", "defer", "do", "else", "fallthrough", "for",
    "guard", "if", "in", "repeat", "return", "throw", "switch", "where",
    "while", "Any", "as", "await", "false", "is", "nil", "self", "Self",
    "super", "throws", "true", "try",
}


def split_path(pathname: str) -> Tuple[str, str, str]:
    """
    Split a slash-separated path into (directory, base name, suffix).

    The directory keeps its trailing slash and the suffix keeps its dot,
    so the three parts concatenate back to the input.

    >>> split_path("a/b/c.proto")
    ('a/b/', 'c', '.proto')
    """
    dir_part = ""
    base = pathname
    slash = pathname.rfind("/")
    if slash >= 0:
        dir_part = pathname[: slash + 1]
        base = pathname[slash + 1 :]

    suffix = ""
    dot = base.rfind(".")
    if dot > 0:
        suffix = base[dot:]
        base = base[:dot]

    return dir_part, base, suffix


def is_valid_identifier(text: str, allow_quoted: bool = False) -> bool:
    """
    Check whether text is a legal bare Swift identifier.

    Args:
        text: Candidate identifier
        allow_quoted: Also accept the backtick-quoted form

    Returns:
        True if valid
    """
    if allow_quoted and len(text) > 2 and text.startswith("`") and text.endswith("`"):
        text = text[1:-1]
    return _IDENTIFIER_RE.fullmatch(text) is not None


def to_upper_camel(name: str) -> str:
    """Convert snake_case or SCREAMING_SNAKE to UpperCamel, keeping inner capitals."""
    parts = [p for p in name.split("_") if p]
    if name.isupper():
        parts = [p.lower() for p in parts]
    return "".join(p[0].upper() + p[1:] for p in parts)


def to_lower_camel(name: str) -> str:
    """Convert snake_case or SCREAMING_SNAKE to lowerCamel."""
    upper = to_upper_camel(name)
    if not upper:
        return upper
    # Lowercase a leading run of capitals ("URLPath" -> "urlPath")
    i = 0
    while i < len(upper) and upper[i].isupper():
        i += 1
    if i > 1 and i < len(upper):
        i -= 1
    return upper[:i].lower() + upper[i:]


def quote_if_reserved(name: str) -> str:
    """Backtick-quote Swift keywords."""
    return f"`{name}`" if name in SWIFT_RESERVED_WORDS else name


def type_prefix(package: str, swift_prefix: str = "") -> str:
    """
    Compute the prefix applied to top-level Swift type names.

    An explicit ``swift_prefix`` option wins; otherwise every package
    component is UpperCamel-cased, underscores dropped, and components are
    joined and terminated with ``_`` ("foo.bar_baz" -> "Foo_BarBaz_").
    """
    if swift_prefix:
        return swift_prefix
    if not package:
        return ""

    result = []
    make_upper = True
    for c in package:
        if c == "_":
            make_upper = True
        elif c == ".":
            make_upper = True
            result.append("_")
        elif make_upper:
            result.append(c.upper())
            make_upper = False
        else:
            result.append(c)
    return "".join(result) + "_"


class NameResolver:
    """
    Resolves Swift names for one schema file.

    Built once per file and passed explicitly to every emitter; never
    shared across files.
    """

    def __init__(
        self,
        file: SchemaFile,
        proto_to_module_mappings: Optional[Mapping[str, str]] = None,
        runtime_module_name: str = "SwiftProtobuf",
    ):
        self.file = file
        self.mappings: Dict[str, str] = dict(proto_to_module_mappings or {})
        self.runtime_module_name = runtime_module_name
        self.type_prefix = type_prefix(file.package, file.options.swift_prefix)

        # Local proto full name -> (Swift name, shortened Swift name)
        self._local_names: Dict[str, Tuple[str, str]] = {}
        for enum in file.enums:
            self._register(enum.full_name, enum.name, None)
        for message in file.messages:
            self._register_message(message, None)

    def _register(self, full_name: str, name: str, parent: Optional[Tuple[str, str]]):
        swift_name = quote_if_reserved(name)
        if parent is None:
            names = (self.type_prefix + swift_name, swift_name)
        else:
            names = (f"{parent[0]}.{swift_name}", f"{parent[1]}.{swift_name}")
        self._local_names[full_name] = names
        return names

    def _register_message(self, message: MessageDecl, parent):
        names = self._register(message.full_name, message.name, parent)
        for enum in message.enums:
            self._register(enum.full_name, enum.name, names)
        for nested in message.messages:
            self._register_message(nested, names)

    @property
    def runtime_module_prefix(self) -> str:
        """Qualifier for runtime symbols; empty inside the runtime itself."""
        if self.file.is_bundled_proto:
            return ""
        return f"{self.runtime_module_name}."

    @property
    def current_module(self) -> Optional[str]:
        """Module this file is mapped into, if any."""
        return self.mappings.get(self.file.name)

    def module_for(self, proto_path: str) -> Optional[str]:
        """Module a proto file is mapped into, if any."""
        return self.mappings.get(proto_path)

    def relative_name(self, decl, shorten: bool = False) -> str:
        """Swift name of a local enum or message as seen from this file."""
        return self.swift_type_name(decl.full_name, shorten)

    def swift_type_name(self, full_name: str, shorten: bool = False) -> str:
        """
        Swift name for a fully qualified proto type name.

        Types declared in this file resolve exactly; foreign types are derived
        from the leading lowercase (package) components of the name.
        """
        full_name = full_name.lstrip(".")
        local = self._local_names.get(full_name)
        if local is not None:
            return local[1] if shorten else local[0]

        parts = full_name.split(".")
        package_parts = []
        while len(parts) > 1 and parts[0][:1].islower():
            package_parts.append(parts.pop(0))
        prefix = "" if shorten else type_prefix(".".join(package_parts))
        return prefix + ".".join(quote_if_reserved(p) for p in parts)

    def property_name(self, field_name: str) -> str:
        """Swift property name for a proto field."""
        return quote_if_reserved(to_lower_camel(field_name))

    def enum_case_name(self, enum: EnumDecl, value_name: str) -> str:
        """
        Swift case name for an enum value.

        A leading ``ENUM_NAME_`` prefix is stripped when what remains is
        still a valid identifier.
        """
        prefix = re.sub(r"(?<!^)(?=[A-Z][a-z])", "_", enum.name).upper() + "_"
        stripped = value_name
        if value_name.upper().startswith(prefix):
            candidate = value_name[len(prefix) :]
            if candidate and is_valid_identifier(candidate):
                stripped = candidate
        return quote_if_reserved(to_lower_camel(stripped))

    def extension_scope(self, full_name: str, shorten: bool = False) -> str:
        """
        Flattened Swift scope of an extension: the enclosing message name
        with dots replaced by underscores, or the type prefix at file scope.
        """
        scope = full_name.lstrip(".").rpartition(".")[0]
        local = self._local_names.get(scope)
        if local is not None:
            return (local[1] if shorten else local[0]).replace(".", "_") + "_"
        return "" if shorten else self.type_prefix

    def extension_name(self, full_name: str, shorten: bool = False) -> str:
        """Swift property name for an extension field (``Foo_Scope_extName``)."""
        name = full_name.lstrip(".").rpartition(".")[2]
        return self.extension_scope(full_name, shorten) + to_lower_camel(name)
