"""Node.js package.json parsing."""

import json

from .errors import ManifestParseError
from .models import Dependency, Ecosystem
from .versions import clean_version


def load_json_object(content: str, ecosystem: Ecosystem) -> dict:
    """Decode a JSON manifest that must be an object at the top level."""
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ManifestParseError(str(ecosystem), e) from e
    if not isinstance(data, dict):
        raise ManifestParseError(
            str(ecosystem), TypeError(f"expected a JSON object, got {type(data).__name__}")
        )
    return data


def dependencies_from_map(section, ecosystem: Ecosystem) -> list[Dependency]:
    """Turn a ``{name: version}`` mapping into dependencies, in declaration order.

    Raises:
        ManifestParseError: If a version is not a string
    """
    if not isinstance(section, dict):
        return []

    dependencies = []
    for name, version in section.items():
        if not name:
            continue
        if not isinstance(version, str):
            raise ManifestParseError(
                str(ecosystem),
                TypeError(f"version of {name!r} must be a string, got {type(version).__name__}"),
            )
        dependencies.append(Dependency(name=name, version=clean_version(version)))
    return dependencies


def parse_package_json(content: str) -> list[Dependency]:
    """Parse package.json content.

    Args:
        content: The package.json file content

    Returns:
        Entries of ``dependencies`` followed by ``devDependencies``
    """
    package = load_json_object(content, Ecosystem.NPM)
    return (
        dependencies_from_map(package.get("dependencies"), Ecosystem.NPM)
        + dependencies_from_map(package.get("devDependencies"), Ecosystem.NPM)
    )
