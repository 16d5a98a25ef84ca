"""Ecosystem dispatch for manifest parsing."""

from collections.abc import Callable
from pathlib import Path

import structlog

from .errors import ManifestNotFoundError, ManifestParseError, UnsupportedEcosystemError
from .models import Dependency, Ecosystem, ParsedDependencies
from .parse_dotnet import parse_nuget
from .parse_go import parse_go_mod
from .parse_java import parse_pom
from .parse_node import parse_package_json
from .parse_php import parse_composer_json
from .parse_python import parse_requirements
from .parse_ruby import parse_gemfile
from .parse_rust import parse_cargo_toml

log = structlog.get_logger("depscout")

ParserFunc = Callable[[str], list[Dependency]]

PARSERS: dict[Ecosystem, ParserFunc] = {
    Ecosystem.NPM: parse_package_json,
    Ecosystem.PYPI: parse_requirements,
    Ecosystem.MAVEN: parse_pom,
    Ecosystem.NUGET: parse_nuget,
    Ecosystem.RUBYGEMS: parse_gemfile,
    Ecosystem.COMPOSER: parse_composer_json,
    Ecosystem.GO: parse_go_mod,
    Ecosystem.CARGO: parse_cargo_toml,
}


def to_ecosystem(ecosystem: str) -> Ecosystem:
    """Convert an identifier to an Ecosystem.

    Raises:
        UnsupportedEcosystemError: If the identifier is not supported
    """
    try:
        return Ecosystem(ecosystem)
    except ValueError:
        raise UnsupportedEcosystemError(ecosystem) from None


class ManifestParser:
    """Turn manifest content into normalised dependency lists."""

    def __init__(self, parsers: dict[Ecosystem, ParserFunc] | None = None):
        self.parsers = parsers if parsers is not None else PARSERS

    def parse_content(self, content: str, ecosystem: str) -> list[Dependency]:
        """Parse dependencies from manifest content.

        Args:
            content: Raw manifest text
            ecosystem: Ecosystem identifier selecting the extraction rule

        Raises:
            UnsupportedEcosystemError: If no parser exists for the ecosystem
            ManifestParseError: If the content is structurally invalid
        """
        eco = to_ecosystem(ecosystem)
        parser = self.parsers.get(eco)
        if parser is None:
            raise UnsupportedEcosystemError(ecosystem)

        log.debug("parser.parse", ecosystem=str(eco))
        return parser(content)

    def parse_file(self, file_path: str | Path, ecosystem: str) -> ParsedDependencies:
        """Read and parse a manifest file.

        Raises:
            ManifestNotFoundError: If the file does not exist
            UnsupportedEcosystemError: If no parser exists for the ecosystem
            ManifestParseError: If the file cannot be read or decoded
        """
        path = Path(file_path).resolve()
        if not path.exists():
            raise ManifestNotFoundError(str(file_path))

        eco = to_ecosystem(ecosystem)
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ManifestParseError(str(eco), e, source=str(path)) from e

        try:
            dependencies = self.parse_content(content, eco)
        except ManifestParseError as e:
            e.context.setdefault("source", str(path))
            raise

        log.debug("parser.parsed", source=str(path), ecosystem=str(eco), count=len(dependencies))
        return ParsedDependencies(ecosystem=eco, source_file=path, dependencies=dependencies)


_default_parser = ManifestParser()


def parse_content(content: str, ecosystem: str) -> list[Dependency]:
    """Parse manifest content with the default parser table."""
    return _default_parser.parse_content(content, ecosystem)


def parse_file(file_path: str | Path, ecosystem: str) -> ParsedDependencies:
    """Parse a manifest file with the default parser table."""
    return _default_parser.parse_file(file_path, ecosystem)
