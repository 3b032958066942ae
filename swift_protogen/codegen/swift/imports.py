"""
Import computation for dependency modules.
"""

from typing import Dict, Iterable, List

from ..core.config import ImportDirective
from ..core.descriptor import Dependency
from ..core.naming import NameResolver


def compute_imports(
    resolver: NameResolver, directive: ImportDirective, reexport_public: bool
) -> List[str]:
    """
    Compute import statements for the modules a file's dependencies live in.

    Public imports of a dependency are followed transitively. Modules are
    skipped when unmapped, when they are the file's own module, or when
    they are the runtime module (imported separately). A module reached
    through a public import is re-exported when ``reexport_public`` is set.

    Args:
        resolver: Name resolver of the file being generated
        directive: Import form to use
        reexport_public: Whether public imports are re-exported

    Returns:
        Sorted, de-duplicated import lines
    """
    # module -> whether it must be re-exported
    modules: Dict[str, bool] = {}
    _collect(resolver.file.dependencies, resolver, reexport_public, False, modules)

    lines = []
    for module in sorted(modules):
        if modules[module]:
            if directive == ImportDirective.ACCESS_LEVEL:
                lines.append(f"public import {module}")
            else:
                lines.append(f"@_exported import {module}")
        else:
            lines.append(f"{directive.snippet} {module}")
    return lines


def _collect(
    dependencies: Iterable[Dependency],
    resolver: NameResolver,
    reexport_public: bool,
    via_public: bool,
    modules: Dict[str, bool],
):
    skipped = {resolver.current_module, resolver.runtime_module_name}
    for dep in dependencies:
        exported = reexport_public and (dep.public or via_public)
        module = resolver.module_for(dep.name)
        if module is not None and module not in skipped:
            modules[module] = modules.get(module, False) or exported
        # A dependency's public imports are visible through it
        _collect(dep.public_dependencies, resolver, reexport_public, exported, modules)
