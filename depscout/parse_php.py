"""PHP composer.json parsing."""

from .models import Dependency, Ecosystem
from .parse_node import dependencies_from_map, load_json_object

# The PHP runtime constraint is not a package. Extension requirements
# (ext-*) are reported like any other entry.
PLATFORM_REQUIREMENT = "php"


def parse_composer_json(content: str) -> list[Dependency]:
    """Parse composer.json ``require`` and ``require-dev`` sections."""
    composer = load_json_object(content, Ecosystem.COMPOSER)
    required = [
        dep for dep in dependencies_from_map(composer.get("require"), Ecosystem.COMPOSER)
        if dep.name != PLATFORM_REQUIREMENT
    ]
    return required + dependencies_from_map(composer.get("require-dev"), Ecosystem.COMPOSER)
