"""
Command-line interface for swift_protogen.

Reads a JSON descriptor set, generates one Swift file per schema file and
writes the results to an output directory (or stdout).
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from . import __version__
from .codegen import generate_files
from .codegen.core.config import (
    ConfigError,
    GenerationMode,
    GeneratorOptions,
    OutputNaming,
    Visibility,
    load_options,
    save_options,
)
from .codegen.core.descriptor import DescriptorError
from .codegen.core.generator import OutputArtifact
from .logging_config import configure_logging, get_logger
from .utils import load_descriptor_set

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Status output goes to stderr so --stdout stays clean
console = Console(stderr=True)


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="swift-protogen",
        description="Generate Swift sources from a JSON protocol buffer descriptor set",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  swift-protogen descriptors.json -o Sources/Generated
  swift-protogen descriptors.json --parameter FileNaming=DropPath,Visibility=Public
  swift-protogen descriptors.json --lite --stdout
        """.strip(),
    )

    parser.add_argument("descriptor_set", help="JSON descriptor set to generate from")
    parser.add_argument(
        "--output-dir", "-o", default=".", help="Output directory (default: .)"
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Write generated sources to stdout instead of files",
    )
    parser.add_argument("--version", action="version", version=__version__)

    options_group = parser.add_argument_group("generator options")
    options_group.add_argument("--config", help="JSON configuration file")
    options_group.add_argument(
        "--parameter",
        help="protoc-style parameter string, e.g. 'FileNaming=DropPath,Visibility=Public'",
    )
    options_group.add_argument(
        "--module-mappings", help="JSON file mapping proto files to modules"
    )
    options_group.add_argument(
        "--file-naming",
        choices=[n.value for n in OutputNaming],
        help="How output filenames are derived from input paths",
    )
    options_group.add_argument(
        "--visibility",
        choices=[v.value for v in Visibility],
        help="Access level of generated declarations",
    )
    options_group.add_argument(
        "--lite", action="store_true", help="Use the lite generation mode"
    )
    options_group.add_argument(
        "--save-config",
        type=Path,
        help="Write the resolved generator options to a JSON file usable with --config",
    )

    log_group = parser.add_argument_group("logging")
    log_group.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    log_group.add_argument("--log-file", type=Path, help="Also write logs to a file")

    return parser


def build_options(args: argparse.Namespace) -> GeneratorOptions:
    """Build generator options from CLI arguments."""
    overrides = {}
    if args.module_mappings:
        overrides["module_mappings_file"] = args.module_mappings
    if args.file_naming:
        overrides["output_naming"] = args.file_naming
    if args.visibility:
        overrides["visibility"] = args.visibility
    if args.lite:
        overrides["generation_mode"] = GenerationMode.LITE

    try:
        return load_options(
            custom_config=overrides,
            config_file=args.config,
            parameter=args.parameter,
        )
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e


def write_artifacts(artifacts: List[OutputArtifact], output_dir: Path) -> int:
    """Write successful artifacts below output_dir. Returns the number written."""
    written = 0
    for artifact in artifacts:
        if not artifact.success:
            continue
        target = output_dir / artifact.filename
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(artifact.content, encoding="utf-8")
        except OSError as e:
            raise CLIError(f"Failed to write {target}: {e}") from e
        logger.debug("Wrote %s", target)
        written += 1
    return written


def _print_summary(artifacts: List[OutputArtifact]):
    table = Table(title="Generated files", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Input", style="bold")
    table.add_column("Output", style="green")
    table.add_column("Status")

    for artifact in artifacts:
        if artifact.success:
            table.add_row(artifact.file_name, artifact.filename, "[green]✓[/green]")
        else:
            table.add_row(
                artifact.file_name, "[dim]-[/dim]", f"[red]✗ {artifact.error_message}[/red]"
            )

    console.print(table)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the CLI.

    Returns:
        Exit code (0 when every file was generated, 1 otherwise)
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, log_file=args.log_file)

    try:
        options = build_options(args)
        if args.save_config:
            save_options(options, args.save_config)
            logger.info("Saved generator options to %s", args.save_config)
        files, files_to_generate = load_descriptor_set(args.descriptor_set)
        artifacts = generate_files(files, options, files_to_generate)

        if args.stdout:
            for artifact in artifacts:
                if artifact.success:
                    sys.stdout.write(artifact.content)
        else:
            write_artifacts(artifacts, Path(args.output_dir))
            _print_summary(artifacts)

    except (CLIError, ConfigError, DescriptorError, FileNotFoundError) as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1

    failures = [a for a in artifacts if not a.success]
    if args.stdout:
        for artifact in failures:
            console.print(f"[red]✗[/red] {artifact.error_message}")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
