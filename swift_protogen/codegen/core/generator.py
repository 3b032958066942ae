"""
Base generator interfaces, error taxonomy and generation results.

Defines the contract every sub-emitter implements and the per-file
result handed back to callers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from ...logging_config import get_logger
from .printer import CodePrinter

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class InvalidIdentifierError(GeneratorError):
    """A configured type prefix is not a valid identifier."""

    def __init__(self, file_name: str, prefix: str):
        super().__init__(
            f"{file_name} has an 'swift_prefix' that isn't a valid Swift "
            f"identifier ({prefix})."
        )
        self.file_name = file_name
        self.prefix = prefix


class DeclarationFailure(GeneratorError):
    """A sub-emitter could not produce its declarations."""

    pass


class DeclarationEmitter(ABC):
    """
    Contract for enum, message and extension emitters.

    ``generate_declaration`` writes the type declaration and raises
    ``DeclarationFailure`` if it can't. ``generate_runtime_support`` writes
    the runtime conformance code; it is never called in lite mode.
    """

    @abstractmethod
    def generate_declaration(self, printer: CodePrinter):
        pass

    def generate_runtime_support(self, printer: CodePrinter, file_generator: Any):
        pass


@dataclass(frozen=True)
class OutputArtifact:
    """Result for one schema file: generated content or an error."""

    file_name: str
    filename: Optional[str] = None
    content: str = ""
    error_message: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error_message is None

    @classmethod
    def error(cls, file_name: str, message: str) -> "OutputArtifact":
        """Create a failed result."""
        return cls(file_name=file_name, error_message=message)


def generate_code(file_generator: Any) -> OutputArtifact:
    """
    Run a file generator with error handling.

    Generation errors become an error artifact for that file; anything
    else is a bug and propagates.

    Args:
        file_generator: Object exposing ``file_name``, ``output_filename``
            and ``generate_output_file(printer)``

    Returns:
        OutputArtifact with code or error
    """
    printer = CodePrinter()
    try:
        file_generator.generate_output_file(printer)
    except GeneratorError as e:
        logger.warning("Generation failed for %s: %s", file_generator.file_name, e)
        return OutputArtifact.error(file_generator.file_name, str(e))

    return OutputArtifact(
        file_name=file_generator.file_name,
        filename=file_generator.output_filename,
        content=printer.content,
    )
