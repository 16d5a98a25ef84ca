"""Content-based ecosystem detection for files with unrecognised names."""

import re
from dataclasses import dataclass
from pathlib import Path

import structlog

from .models import DetectedFile, Ecosystem, FileType

log = structlog.get_logger("depscout")


@dataclass(frozen=True)
class Signature:
    """A content pattern that identifies one ecosystem."""

    ecosystem: Ecosystem
    pattern: re.Pattern
    confidence: float

    def matches(self, content: str) -> bool:
        return self.pattern.search(content) is not None


# Evaluated in order; the first match wins. No MULTILINE flag, so ``^``
# anchors at the start of the content.
SIGNATURES: tuple[Signature, ...] = (
    Signature(
        Ecosystem.NPM,
        re.compile(
            r'"dependencies":|"devDependencies":|"scripts":'
            r'|"name":\s*"[^"]+"|"version":\s*"[^"]+"'
        ),
        0.8,
    ),
    Signature(
        Ecosystem.PYPI,
        re.compile(r"^[a-zA-Z0-9\-_.]+[>=<~!]=|^-r\s+|^--requirement\s+|^pip\s+install"),
        0.7,
    ),
    Signature(
        Ecosystem.MAVEN,
        re.compile(r"<dependencies>|<groupId>|<artifactId>|<version>.*</version>|<project.*xmlns"),
        0.8,
    ),
    Signature(
        Ecosystem.NUGET,
        re.compile(r"<PackageReference|<package\s+id=|<Project\s+Sdk="),
        0.8,
    ),
    Signature(
        Ecosystem.RUBYGEMS,
        re.compile(r"""gem\s+['"][a-zA-Z0-9\-_.]+['"]|source\s+['"]https://rubygems\.org['"]"""),
        0.7,
    ),
    Signature(
        Ecosystem.COMPOSER,
        re.compile(r'"require":|"require-dev":|"autoload":|"psr-4":'),
        0.8,
    ),
    Signature(
        Ecosystem.GO,
        re.compile(r"module\s+[a-zA-Z0-9\-_./]+|require\s+[a-zA-Z0-9\-_./]+|go\s+\d+\.\d+"),
        0.8,
    ),
    Signature(
        Ecosystem.CARGO,
        re.compile(r'\[dependencies\]|\[dev-dependencies\]|\[package\]|name\s*=\s*"[^"]+"'),
        0.8,
    ),
)


def identify(content: str) -> Signature | None:
    """Detect ecosystem from manifest content.

    Args:
        content: The manifest file content

    Returns:
        The first matching signature, or None if nothing matches
    """
    for signature in SIGNATURES:
        if signature.matches(content):
            return signature
    return None


def sniff_file(path: Path) -> DetectedFile | None:
    """Classify a file by its content alone.

    An unreadable file is not an error here: it is logged and reported as
    unclassified.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        log.debug("sniffer.read_failed", path=str(path), error=str(e))
        return None

    signature = identify(content)
    if signature is None:
        log.debug("sniffer.no_match", path=str(path))
        return None

    return DetectedFile(
        path=path,
        ecosystem=signature.ecosystem,
        confidence=signature.confidence,
        type=FileType.PRIMARY,
    )
