"""
Core code generation components.

Provides the descriptor model, options, naming and text utilities used by
the Swift generator.
"""

from .generator import (
    DeclarationEmitter,
    DeclarationFailure,
    GeneratorError,
    InvalidIdentifierError,
    OutputArtifact,
    generate_code,
)
from .descriptor import (
    Dependency,
    DescriptorError,
    EnumDecl,
    EnumValueDecl,
    ExtensionDecl,
    FieldDecl,
    FieldLabel,
    FieldType,
    FileOptions,
    MessageDecl,
    SchemaFile,
    SourceLocation,
)
from .naming import NameResolver, is_valid_identifier, split_path
from .config import (
    ConfigError,
    GenerationMode,
    GeneratorOptions,
    ImportDirective,
    OutputNaming,
    Visibility,
    load_options,
)
from .printer import CodePrinter
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Generator interface and errors
    "DeclarationEmitter",
    "DeclarationFailure",
    "GeneratorError",
    "InvalidIdentifierError",
    "OutputArtifact",
    "generate_code",
    # Descriptor model
    "Dependency",
    "DescriptorError",
    "EnumDecl",
    "EnumValueDecl",
    "ExtensionDecl",
    "FieldDecl",
    "FieldLabel",
    "FieldType",
    "FileOptions",
    "MessageDecl",
    "SchemaFile",
    "SourceLocation",
    # Naming
    "NameResolver",
    "is_valid_identifier",
    "split_path",
    # Configuration
    "ConfigError",
    "GenerationMode",
    "GeneratorOptions",
    "ImportDirective",
    "OutputNaming",
    "Visibility",
    "load_options",
    # Output
    "CodePrinter",
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
