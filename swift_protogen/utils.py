"""Utility functions for loading descriptor sets.

A descriptor set is a JSON document describing the schema files of one
generation run::

    {"files": [{"name": "foo.proto", ...}], "file_to_generate": ["foo.proto"]}

A bare list of file objects is also accepted.
"""

import json
from pathlib import Path
from typing import Any, List, Optional, Tuple

from .codegen.core.descriptor import DescriptorError, SchemaFile
from .logging_config import get_logger

logger = get_logger(__name__)


def load_descriptor_set(
    file_path: str | Path,
) -> Tuple[List[SchemaFile], Optional[List[str]]]:
    """Load schema file descriptors from a JSON descriptor set.

    Args:
        file_path: Path to the descriptor set.

    Returns:
        Tuple of (descriptors in file order, names to generate or None for all).

    Raises:
        FileNotFoundError: If file doesn't exist.
        DescriptorError: If the file can't be read or doesn't describe files.
    """
    file_path = Path(file_path)
    logger.debug("Loading descriptor set from %s", file_path)

    if not file_path.exists():
        logger.error("File not found: %s", file_path)
        raise FileNotFoundError(f"File not found: {file_path}")

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise DescriptorError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        raise DescriptorError(f"Error reading file {file_path}: {e}") from e

    return parse_descriptor_set(data)


def parse_descriptor_set(
    data: Any,
) -> Tuple[List[SchemaFile], Optional[List[str]]]:
    """Build descriptors from already-parsed descriptor set JSON."""
    files_to_generate = None
    if isinstance(data, dict):
        entries = data.get("files")
        files_to_generate = data.get("file_to_generate")
    else:
        entries = data

    if not isinstance(entries, list):
        raise DescriptorError("Descriptor set must contain a list of files")

    files = [SchemaFile.from_dict(entry) for entry in entries]

    if files_to_generate is not None:
        if not isinstance(files_to_generate, list):
            raise DescriptorError("'file_to_generate' must be a list of names")
        known = {f.name for f in files}
        missing = [name for name in files_to_generate if name not in known]
        if missing:
            raise DescriptorError(
                f"'file_to_generate' names unknown files: {', '.join(missing)}"
            )

    logger.info("Loaded %d file descriptor(s)", len(files))
    return files, files_to_generate
