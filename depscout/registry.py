"""Static table of supported ecosystems and the files that identify them."""

from .models import Ecosystem, EcosystemDefinition, FileType

REGISTRY: tuple[EcosystemDefinition, ...] = (
    EcosystemDefinition(
        name=Ecosystem.NPM,
        display_name="Node.js/npm",
        primary=("package.json",),
        lockfiles=("package-lock.json", "yarn.lock", "pnpm-lock.yaml"),
        config=(".npmrc",),
    ),
    EcosystemDefinition(
        name=Ecosystem.PYPI,
        display_name="Python/PyPI",
        primary=("requirements.txt", "Pipfile", "pyproject.toml", "setup.py"),
        lockfiles=("Pipfile.lock", "poetry.lock"),
        config=("pip.conf", ".pip.conf"),
    ),
    EcosystemDefinition(
        name=Ecosystem.MAVEN,
        display_name="Java/Maven",
        primary=("pom.xml", "build.gradle", "build.gradle.kts"),
        lockfiles=("gradle.lockfile",),
        config=("gradle.properties", "settings.gradle"),
    ),
    EcosystemDefinition(
        name=Ecosystem.NUGET,
        display_name=".NET/NuGet",
        primary=("packages.config",),
        lockfiles=("packages.lock.json",),
        config=("nuget.config",),
    ),
    EcosystemDefinition(
        name=Ecosystem.RUBYGEMS,
        display_name="Ruby/RubyGems",
        primary=("Gemfile",),
        lockfiles=("Gemfile.lock",),
        config=(".gemrc",),
    ),
    EcosystemDefinition(
        name=Ecosystem.COMPOSER,
        display_name="PHP/Composer",
        primary=("composer.json",),
        lockfiles=("composer.lock",),
    ),
    EcosystemDefinition(
        name=Ecosystem.GO,
        display_name="Go",
        primary=("go.mod",),
        lockfiles=("go.sum",),
    ),
    EcosystemDefinition(
        name=Ecosystem.CARGO,
        display_name="Rust/Cargo",
        primary=("Cargo.toml",),
        lockfiles=("Cargo.lock",),
        config=(".cargo/config.toml",),
    ),
)

# Directories never descended into during recursive search
IGNORE_DIRECTORIES = frozenset({
    "node_modules",
    ".git",
    ".svn",
    ".hg",
    "dist",
    "build",
    "target",
    "bin",
    "obj",
    "__pycache__",
    ".pytest_cache",
    "venv",
    "env",
    ".env",
    ".vscode",
    ".idea",
    "coverage",
    ".nyc_output",
    "logs",
    "tmp",
    "temp",
})

# .NET project files are named after the project, so they match by extension
DOTNET_PROJECT_EXTENSIONS = (".csproj", ".fsproj", ".vbproj")
DOTNET_SOLUTION_EXTENSION = ".sln"
DOTNET_PROJECT_CONFIDENCE = 0.9
DOTNET_SOLUTION_CONFIDENCE = 0.8

ECOSYSTEM_PRIORITY: tuple[Ecosystem, ...] = (
    Ecosystem.NPM,
    Ecosystem.PYPI,
    Ecosystem.MAVEN,
    Ecosystem.NUGET,
    Ecosystem.RUBYGEMS,
    Ecosystem.COMPOSER,
    Ecosystem.GO,
    Ecosystem.CARGO,
)

# Confidence at depth 0, per-level decay and lower bound for each file type
BASE_CONFIDENCE = {
    FileType.PRIMARY: 0.9,
    FileType.LOCKFILE: 0.7,
    FileType.CONFIG: 0.3,
}
CONFIDENCE_DECAY = {
    FileType.PRIMARY: 0.2,
    FileType.LOCKFILE: 0.2,
    FileType.CONFIG: 0.1,
}
CONFIDENCE_FLOOR = {
    FileType.PRIMARY: 0.5,
    FileType.LOCKFILE: 0.3,
    FileType.CONFIG: 0.1,
}


def confidence_for(file_type: FileType, depth: int) -> float:
    """Confidence of a filename match found ``depth`` levels below the root."""
    base = BASE_CONFIDENCE[file_type]
    if depth <= 0:
        return base
    return round(max(CONFIDENCE_FLOOR[file_type], base - depth * CONFIDENCE_DECAY[file_type]), 4)


def match_filename(filename: str) -> tuple[EcosystemDefinition, FileType] | None:
    """Find the ecosystem and role for an exact filename."""
    for definition in REGISTRY:
        for file_type, names in definition.files_by_type():
            if filename in names:
                return definition, file_type
    return None


def ecosystem_rank(ecosystem: str) -> int:
    """Position of an ecosystem in the tie-break preference order."""
    try:
        return ECOSYSTEM_PRIORITY.index(ecosystem)
    except ValueError:
        return len(ECOSYSTEM_PRIORITY)
