"""
swift_protogen code generation module

Generates one Swift source file per schema file descriptor.
"""

from typing import Dict, Iterable, List, Optional

from ..logging_config import get_logger
from .core.config import GeneratorOptions, load_options
from .core.descriptor import SchemaFile
from .core.generator import (
    DeclarationFailure,
    GeneratorError,
    InvalidIdentifierError,
    OutputArtifact,
    generate_code,
)
from .swift.file_generator import FileGenerator

logger = get_logger(__name__)


def generate_file(
    schema_file: SchemaFile, options: Optional[GeneratorOptions] = None, **kwargs
) -> OutputArtifact:
    """
    Generate the output for a single schema file.

    Args:
        schema_file: Descriptor of the file
        options: Generator options (defaults if None)
        **kwargs: Passed through to FileGenerator (emitter classes, import resolver)

    Returns:
        OutputArtifact with the generated text or an error message
    """
    generator = FileGenerator(schema_file, options or GeneratorOptions(), **kwargs)
    return generate_code(generator)


def generate_files(
    files: Iterable[SchemaFile],
    options: Optional[GeneratorOptions] = None,
    files_to_generate: Optional[Iterable[str]] = None,
) -> List[OutputArtifact]:
    """
    Generate outputs for a batch of schema files.

    Each file is generated independently; a failure only affects that
    file's artifact. A file whose output filename collides with an earlier
    file's gets an error artifact instead of overwriting it.

    Args:
        files: Descriptors, in the order results should be returned
        options: Generator options shared by the whole batch
        files_to_generate: Names of the files to generate (all if None)

    Returns:
        One OutputArtifact per generated file
    """
    options = options or GeneratorOptions()
    wanted = set(files_to_generate) if files_to_generate is not None else None

    results: List[OutputArtifact] = []
    claimed: Dict[str, str] = {}

    for schema_file in files:
        if wanted is not None and schema_file.name not in wanted:
            continue

        artifact = generate_file(schema_file, options)
        if artifact.success:
            owner = claimed.get(artifact.filename)
            if owner is not None:
                message = (
                    f"{schema_file.name}: output filename '{artifact.filename}' "
                    f"collides with the output of {owner}"
                )
                logger.warning("%s", message)
                artifact = OutputArtifact.error(schema_file.name, message)
            else:
                claimed[artifact.filename] = schema_file.name
        results.append(artifact)

    logger.debug(
        "Generated %d file(s), %d failed",
        len(results),
        sum(1 for r in results if not r.success),
    )
    return results


__all__ = [
    "DeclarationFailure",
    "FileGenerator",
    "GeneratorError",
    "GeneratorOptions",
    "InvalidIdentifierError",
    "OutputArtifact",
    "SchemaFile",
    "generate_file",
    "generate_files",
    "load_options",
]
