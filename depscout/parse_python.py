"""Python requirements.txt parsing."""

import re

from packaging.requirements import InvalidRequirement, Requirement

from .models import LATEST, Dependency
from .versions import clean_version

# name<op>version, e.g. requests>=2.0.0
_PINNED = re.compile(r"^([a-zA-Z0-9\-_.]+)([>=<~!]+)([0-9a-zA-Z\-_.]+)")
# A bare distribution name
_BARE = re.compile(r"^([a-zA-Z0-9\-_.]+)$")
# First comparator/version pair anywhere in a line
_SPECIFIER = re.compile(r"(?:===|==|>=|<=|~=|!=|>|<)\s*([0-9a-zA-Z\-_.*+!]+)")


class RequirementsParser:
    """Parser for Python requirements.txt files."""

    def __init__(self):
        # Patterns for lines to skip
        self.skip_patterns = [
            r"^#",  # Comment lines
            r"^-",  # pip options: -r, -e, -f, --index-url, ...
            r"^git\+",  # Git URLs
            r"^hg\+",  # Mercurial URLs
            r"^svn\+",  # SVN URLs
            r"^bzr\+",  # Bazaar URLs
            r"^https?://",  # Direct URLs
            r"^file://",  # File URLs
            r"^\./",  # Local paths
        ]

    def _should_skip_line(self, line: str) -> bool:
        """Check if a line should be skipped during parsing."""
        if not line:
            return True

        return any(re.match(pattern, line) for pattern in self.skip_patterns)

    def _parse_with_packaging(self, line: str) -> Dependency | None:
        """Fallback for lines the simple patterns miss, such as ``pkg[extra]>=1.0``."""
        try:
            req = Requirement(line)
        except InvalidRequirement:
            return None

        if not req.specifier:
            return Dependency(name=req.name.lower(), version=LATEST)

        # Specifier sets are unordered, so read the first one from the text
        requirement_part = line.split(";", 1)[0]
        match = _SPECIFIER.search(requirement_part)
        if not match:
            return Dependency(name=req.name.lower(), version=LATEST)
        return Dependency(name=req.name.lower(), version=clean_version(match.group(1)))

    def _parse_requirement_line(self, line: str) -> Dependency | None:
        """Parse a single requirement line."""
        match = _PINNED.match(line)
        if match:
            name, _, version = match.groups()
            return Dependency(name=name.lower(), version=clean_version(version))

        match = _BARE.match(line)
        if match:
            return Dependency(name=match.group(1).lower(), version=LATEST)

        return self._parse_with_packaging(line)

    def parse(self, content: str) -> list[Dependency]:
        """Parse requirements.txt content into dependencies."""
        dependencies: list[Dependency] = []

        for raw_line in content.splitlines():
            # Inline comments never carry requirement data
            line = raw_line.split(" #", 1)[0].strip()
            if self._should_skip_line(line):
                continue

            dependency = self._parse_requirement_line(line)
            if dependency:
                dependencies.append(dependency)

        return dependencies


def parse_requirements(content: str) -> list[Dependency]:
    """Parse requirements.txt content.

    Args:
        content: The requirements.txt file content

    Returns:
        Dependencies in declaration order; unpinned names get version "latest"
    """
    parser = RequirementsParser()
    return parser.parse(content)
