"""Go go.mod parsing."""

import re

from .models import Dependency
from .versions import clean_version

# Optional `require` keyword followed by module path and version
_REQUIRE = re.compile(r"(?:require\s+)?(\S+)\s+(\S+)")


def parse_go_mod(content: str) -> list[Dependency]:
    """Parse single-line ``require`` directives and ``require ( ... )`` blocks."""
    dependencies = []
    in_require_block = False

    for line in content.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("//"):
            continue

        if stripped == "require (":
            in_require_block = True
            continue
        if in_require_block and stripped == ")":
            in_require_block = False
            continue

        if in_require_block or stripped.startswith("require "):
            match = _REQUIRE.match(stripped)
            if match:
                module, version = match.groups()
                dependencies.append(Dependency(name=module, version=clean_version(version)))

    return dependencies
