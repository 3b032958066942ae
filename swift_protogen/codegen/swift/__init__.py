"""
Swift code generator.

Generates Swift sources for the SwiftProtobuf runtime from schema file
descriptors.
"""

from .emitters import EnumGenerator, ExtensionSetGenerator, MessageGenerator
from .file_generator import (
    COMPATIBILITY_VERSION,
    OUTPUT_EXTENSION,
    FileGenerator,
    output_filename,
)
from .imports import compute_imports

__all__ = [
    "COMPATIBILITY_VERSION",
    "OUTPUT_EXTENSION",
    "EnumGenerator",
    "ExtensionSetGenerator",
    "FileGenerator",
    "MessageGenerator",
    "compute_imports",
    "output_filename",
]
