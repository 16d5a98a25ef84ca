"""Ruby Gemfile parsing."""

import re

from .models import LATEST, Dependency
from .versions import clean_version

# gem 'name' or gem "name", "version"
_GEM = re.compile(r"""gem\s+['"]([^'"]+)['"](?:\s*,\s*['"]([^'"]+)['"])?""")


def parse_gemfile(content: str) -> list[Dependency]:
    """Parse ``gem`` declarations; gems without a version get "latest"."""
    dependencies = []
    for line in content.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        match = _GEM.search(stripped)
        if match:
            name, version = match.groups()
            dependencies.append(
                Dependency(
                    name=name.strip(),
                    version=clean_version(version.strip()) if version else LATEST,
                )
            )
    return dependencies
