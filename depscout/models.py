"""Core data models for depscout."""

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

LATEST = "latest"


class Ecosystem(StrEnum):
    """Package ecosystems depscout knows how to detect and parse."""

    NPM = "npm"
    PYPI = "pypi"
    MAVEN = "maven"
    NUGET = "nuget"
    RUBYGEMS = "rubygems"
    COMPOSER = "composer"
    GO = "go"
    CARGO = "cargo"


class FileType(StrEnum):
    """Role a detected file plays within its ecosystem."""

    PRIMARY = "primary"
    LOCKFILE = "lockfile"
    CONFIG = "config"


@dataclass(frozen=True)
class EcosystemDefinition:
    """Filenames recognised for one ecosystem."""

    name: Ecosystem
    display_name: str
    primary: tuple[str, ...]
    lockfiles: tuple[str, ...] = ()
    config: tuple[str, ...] = ()

    def files_by_type(self) -> tuple[tuple[FileType, tuple[str, ...]], ...]:
        return (
            (FileType.PRIMARY, self.primary),
            (FileType.LOCKFILE, self.lockfiles),
            (FileType.CONFIG, self.config),
        )


@dataclass(frozen=True)
class DetectedFile:
    """A manifest candidate found on disk."""

    path: Path
    ecosystem: Ecosystem
    confidence: float
    type: FileType

    def __post_init__(self):
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence out of range: {self.confidence}")

    @property
    def depth(self) -> int:
        """Number of path segments, used to prefer files near the root."""
        return len(self.path.parts)

    def to_dict(self) -> dict:
        return {
            "path": str(self.path),
            "ecosystem": str(self.ecosystem),
            "confidence": self.confidence,
            "type": str(self.type),
        }


@dataclass(frozen=True)
class Subproject:
    """A directory holding its own primary manifest."""

    path: Path
    ecosystem: Ecosystem
    file_count: int


@dataclass(frozen=True)
class ProjectStructure:
    """Layout of a scanned project."""

    is_monorepo: bool
    root_ecosystem: Ecosystem | None = None
    subprojects: tuple[Subproject, ...] = ()
    total_files: int = 0


@dataclass(frozen=True)
class Dependency:
    """A single (name, version) pair declared by a manifest."""

    name: str
    version: str = LATEST

    def __post_init__(self):
        if not self.name:
            raise ValueError("dependency name must not be empty")

    def to_dict(self) -> dict:
        return {"name": self.name, "version": self.version}


@dataclass
class ParsedDependencies:
    """Dependencies extracted from one manifest file."""

    ecosystem: Ecosystem
    source_file: Path
    dependencies: list[Dependency] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "ecosystem": str(self.ecosystem),
            "dependencies": [dep.to_dict() for dep in self.dependencies],
            "source_file": str(self.source_file),
        }
