"""Rust Cargo.toml parsing."""

import re

from .models import Dependency
from .versions import clean_version

DEPENDENCY_SECTIONS = ("[dependencies]", "[dev-dependencies]")

# serde = "1.0"
_DEPENDENCY = re.compile(r'^([^=\s]+)\s*=\s*"([^"]+)"')


def parse_cargo_toml(content: str) -> list[Dependency]:
    """Parse ``name = "version"`` lines of the dependency sections.

    Table-style entries (``serde = { version = "1" }``) are not matched.
    """
    dependencies = []
    in_dependencies = False

    for line in content.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        if stripped.startswith("["):
            in_dependencies = stripped in DEPENDENCY_SECTIONS
            continue

        if in_dependencies:
            match = _DEPENDENCY.match(stripped)
            if match:
                name, version = match.groups()
                dependencies.append(Dependency(name=name, version=clean_version(version)))

    return dependencies
