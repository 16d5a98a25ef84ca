"""Maven pom.xml parsing."""

import re

from .models import Dependency
from .versions import clean_version

# groupId, artifactId and version of a <dependency> block, in that order
_DEPENDENCY = re.compile(
    r"<dependency>.*?<groupId>(.*?)</groupId>.*?<artifactId>(.*?)</artifactId>"
    r".*?<version>(.*?)</version>.*?</dependency>",
    re.DOTALL,
)


def parse_pom(content: str) -> list[Dependency]:
    """Extract ``groupId:artifactId`` dependencies that declare a version."""
    return [
        Dependency(name=f"{group.strip()}:{artifact.strip()}", version=clean_version(version.strip()))
        for group, artifact, version in _DEPENDENCY.findall(content)
    ]
