"""
File-level generation logic.

``FileGenerator.generate_output_file`` builds the Swift source for a
single schema file: banner and carried-over comments, imports, the
runtime version guard, then declarations and runtime support in a fixed
order. Lite mode keeps only the declarations.
"""

from typing import Callable, List, Optional

from ...logging_config import get_logger
from ..core.config import GeneratorOptions, OutputNaming, Visibility
from ..core.descriptor import FILE_EDITION_FIELD, FILE_SYNTAX_FIELD, SchemaFile
from ..core.generator import InvalidIdentifierError
from ..core.naming import NameResolver, is_valid_identifier, split_path
from ..core.printer import CodePrinter
from ..core.templates import create_template_engine
from .emitters import (
    TEMPLATE_DIR,
    EnumGenerator,
    ExtensionSetGenerator,
    MessageGenerator,
)
from .imports import compute_imports

logger = get_logger(__name__)

OUTPUT_EXTENSION = ".pb.swift"

# Bumped whenever generated code stops being compatible with older runtimes
COMPATIBILITY_VERSION = 2

DOCUMENTATION_URL = "https://github.com/apple/swift-protobuf/"

NO_DECLARATIONS_COMMENT = "// This file contained no messages, enums, or extensions."


def output_filename(
    pathname: str, naming: OutputNaming, extension: str = OUTPUT_EXTENSION
) -> str:
    """
    Derive the output filename for an input path.

    >>> output_filename("a/b/c.proto", OutputNaming.PATH_TO_UNDERSCORES, ".out")
    'a_b_c.out'
    """
    dir_part, base, _ = split_path(pathname)
    if naming == OutputNaming.FULL_PATH:
        return dir_part + base + extension
    if naming == OutputNaming.PATH_TO_UNDERSCORES:
        return dir_part.replace("/", "_") + base + extension
    return base + extension


class FileGenerator:
    """Generates the output for one schema file."""

    def __init__(
        self,
        schema_file: SchemaFile,
        options: GeneratorOptions,
        *,
        enum_generator_class=EnumGenerator,
        message_generator_class=MessageGenerator,
        extension_set_class=ExtensionSetGenerator,
        import_resolver: Optional[Callable[..., List[str]]] = None,
    ):
        self.schema_file = schema_file
        self.options = options
        self.resolver = NameResolver(
            schema_file,
            proto_to_module_mappings=options.proto_to_module_mappings,
            runtime_module_name=options.runtime_module_name,
        )
        self.shorten_type_naming = any(
            pattern in schema_file.name for pattern in options.shorten_type_naming_files
        )

        self.enum_generator_class = enum_generator_class
        self.message_generator_class = message_generator_class
        self.extension_set_class = extension_set_class
        self.import_resolver = import_resolver or compute_imports
        self.template_engine = create_template_engine(TEMPLATE_DIR)

    @property
    def file_name(self) -> str:
        return self.schema_file.name

    @property
    def output_filename(self) -> str:
        return output_filename(self.schema_file.name, self.options.output_naming)

    def generate_output_file(self, printer: CodePrinter):
        """
        Write the generated source for this file into ``printer``.

        Raises:
            InvalidIdentifierError: If the file's swift_prefix is not an identifier
            DeclarationFailure: If a message can't be declared; whatever was
                printed so far must be discarded
        """
        prefix = self.schema_file.options.swift_prefix
        if prefix and not is_valid_identifier(prefix, allow_quoted=False):
            raise InvalidIdentifierError(self.file_name, prefix)

        logger.debug(
            "Generating %s (%s mode)", self.file_name, self.options.generation_mode
        )

        self._generate_banner(printer)
        self._generate_file_comments(printer)

        if self.options.is_lite_mode:
            self._generate_output_file_lite(printer)
            return

        has_imports = self._generate_imports(printer)

        # Usually a file with only services
        if not self.schema_file.defines_types:
            if has_imports:
                printer.print()
            printer.print(NO_DECLARATIONS_COMMENT)
            return

        printer.print()
        self._generate_version_check(printer)

        extension_set = self.extension_set_class(
            self.schema_file, self.options, self.resolver
        )
        extension_set.add(self.schema_file.extensions)

        enums = [
            self.enum_generator_class(e, self.options, self.resolver)
            for e in self.schema_file.enums
        ]
        messages = [
            self.message_generator_class(m, self.options, self.resolver, extension_set)
            for m in self.schema_file.messages
        ]

        for enum in enums:
            enum.generate_declaration(printer)
        for message in messages:
            message.generate_declaration(printer)

        if not extension_set.is_empty:
            _, base, suffix = split_path(self.file_name)
            printer.print("", f"// MARK: - Extension support defined in {base}{suffix}.")
            extension_set.generate_message_extensions(printer)
            extension_set.generate_file_registry(printer)
            # Last: only needed when building an extension map by hand
            extension_set.generate_extension_declarations(printer)

        self._generate_runtime_support(printer, enums, messages)

    def _generate_banner(self, printer: CodePrinter):
        banner = self.template_engine.render_template(
            "banner.swift.j2",
            {
                "source_name": self.file_name,
                "mode": self.options.generation_mode,
                "documentation_url": DOCUMENTATION_URL,
            },
        )
        printer.print(banner.rstrip("\n") + "\n")

    def _generate_file_comments(self, printer: CodePrinter):
        # The file itself never carries comments; the edition or syntax
        # statement is where a leading copyright block ends up
        location = self.schema_file.comment_at((FILE_EDITION_FIELD,))
        if location is None:
            location = self.schema_file.comment_at((FILE_SYNTAX_FIELD,))
        if location is None:
            return

        comments = location.as_source_comment(
            comment_prefix="///", leading_detached_prefix="//"
        )
        if comments:
            printer.print(comments, newlines=not comments.endswith("\n\n"))

    def _generate_imports(self, printer: CodePrinter) -> bool:
        directive = self.options.import_directive
        runtime_module = self.resolver.runtime_module_name
        has_imports = False

        if self.schema_file.needs_foundation_import:
            printer.print(f"{directive.snippet} Foundation")
            has_imports = True

        if self.schema_file.is_bundled_proto:
            printer.print(
                f"// 'import {runtime_module}' suppressed, this proto file is "
                "meant to be bundled in the runtime."
            )
            has_imports = True
        elif self.schema_file.defines_types:
            printer.print(f"{directive.snippet} {runtime_module}")
            has_imports = True

        needed_imports = self.import_resolver(
            self.resolver,
            directive,
            self.options.visibility != Visibility.FILE_LOCAL,
        )
        if needed_imports:
            if has_imports:
                printer.print()
            printer.print(*needed_imports)
            has_imports = True

        return has_imports

    def _generate_version_check(self, printer: CodePrinter):
        printer.print(
            self.template_engine.render_template(
                "version_check.swift.j2",
                {
                    "prefix": self.resolver.runtime_module_prefix,
                    "runtime_module": self.resolver.runtime_module_name,
                    "version": COMPATIBILITY_VERSION,
                },
            ).rstrip("\n")
        )

    def _generate_runtime_support(self, printer: CodePrinter, enums, messages):
        package = self.schema_file.package
        # Only top-level message names are built from the package binding
        needs_package = bool(package) and bool(messages)

        printer.print(
            "",
            "// MARK: - Code below here is support for the "
            f"{self.resolver.runtime_module_name} runtime.",
        )
        if needs_package:
            printer.print("", f'fileprivate let _protobuf_package = "{package}"')

        for enum in enums:
            enum.generate_runtime_support(printer, self)
        for message in messages:
            message.generate_runtime_support(printer, self)

    def _generate_output_file_lite(self, printer: CodePrinter):
        if not self.schema_file.defines_types:
            printer.print()
            printer.print(NO_DECLARATIONS_COMMENT)
            return

        printer.print("import Foundation")

        shorten = self.shorten_type_naming
        extension_set = self.extension_set_class(
            self.schema_file, self.options, self.resolver
        )
        extension_set.add(self.schema_file.extensions)

        enums = [
            self.enum_generator_class(
                e, self.options, self.resolver, shorten_naming=shorten
            )
            for e in self.schema_file.enums
        ]
        messages = [
            self.message_generator_class(
                m, self.options, self.resolver, extension_set, shorten_naming=shorten
            )
            for m in self.schema_file.messages
        ]

        for enum in enums:
            enum.generate_declaration(printer)
        for message in messages:
            message.generate_declaration(printer)
