"""Manifest detection and ranking for a project tree."""

from functools import cmp_to_key
from pathlib import Path

import structlog

from .errors import ManifestNotFoundError
from .models import DetectedFile, Ecosystem, EcosystemDefinition, FileType, ProjectStructure, Subproject
from .registry import (
    BASE_CONFIDENCE,
    DOTNET_PROJECT_CONFIDENCE,
    DOTNET_PROJECT_EXTENSIONS,
    DOTNET_SOLUTION_CONFIDENCE,
    DOTNET_SOLUTION_EXTENSION,
    REGISTRY,
    confidence_for,
    ecosystem_rank,
)
from .sniff import sniff_file
from .walker import DirectoryListing, walk

log = structlog.get_logger("depscout")

DEFAULT_MAX_DEPTH = 3

# Confidence differences at or below these are treated as ties
RANKING_TOLERANCE = 0.05
BEST_FILE_TOLERANCE = 0.1


def _compare(a: DetectedFile, b: DetectedFile, tolerance: float) -> int:
    a_primary = a.type == FileType.PRIMARY
    b_primary = b.type == FileType.PRIMARY
    if a_primary != b_primary:
        return -1 if a_primary else 1

    if abs(a.confidence - b.confidence) > tolerance:
        return -1 if a.confidence > b.confidence else 1

    if a.depth != b.depth:
        return a.depth - b.depth

    # Equal files keep discovery order, which follows registry declaration order
    return ecosystem_rank(a.ecosystem) - ecosystem_rank(b.ecosystem)


def rank_files(files: list[DetectedFile], tolerance: float = RANKING_TOLERANCE) -> list[DetectedFile]:
    """Sort candidates: primary first, then confidence, depth, ecosystem preference."""
    return sorted(files, key=cmp_to_key(lambda a, b: _compare(a, b, tolerance)))


class Detector:
    """Locate and classify dependency manifests below a project directory."""

    def __init__(
        self,
        project_path: str | Path = ".",
        max_depth: int = DEFAULT_MAX_DEPTH,
        registry: tuple[EcosystemDefinition, ...] = REGISTRY,
    ):
        """Initialize detector.

        Args:
            project_path: Root of the project to scan
            max_depth: Deepest directory level searched (root is depth 0)
            registry: Ecosystem table used for filename matching
        """
        self.project_path = Path(project_path).resolve()
        self.max_depth = max_depth
        self.registry = registry

    def detect_files(self) -> list[DetectedFile]:
        """Detect dependency files in the project with a bounded recursive search.

        The project root is checked first. Subdirectories are searched for
        registry filenames only when the root holds none. .NET project files
        are always looked for at every depth since their names vary.
        """
        log.debug("detector.scan", project_path=str(self.project_path), max_depth=self.max_depth)

        detected: list[DetectedFile] = []
        found_at_root = False

        for listing in walk(self.project_path, self.max_depth):
            if listing.depth == 0:
                root_matches = self._match_registry(listing)
                found_at_root = bool(root_matches)
                detected.extend(root_matches)
                if not found_at_root:
                    log.info("detector.searching_subdirectories", project_path=str(self.project_path))
            elif not found_at_root:
                detected.extend(self._match_registry(listing))

            detected.extend(self._match_dotnet(listing))

        structure = self.detect_project_structure(detected)
        if structure.is_monorepo:
            log.info("detector.monorepo", subprojects=len(structure.subprojects))

        return rank_files(detected)

    def detect_file(self, file_path: str | Path) -> DetectedFile | None:
        """Classify a single explicitly named file.

        Raises:
            ManifestNotFoundError: If the path does not exist
        """
        path = Path(file_path).resolve()
        if not path.exists():
            raise ManifestNotFoundError(str(file_path))

        relative_name = f"{path.parent.name}/{path.name}"
        for definition in self.registry:
            for file_type, names in definition.files_by_type():
                if path.name in names or relative_name in names:
                    return DetectedFile(
                        path=path,
                        ecosystem=definition.name,
                        confidence=BASE_CONFIDENCE[file_type],
                        type=file_type,
                    )

        if path.suffix in DOTNET_PROJECT_EXTENSIONS:
            return DetectedFile(
                path=path,
                ecosystem=Ecosystem.NUGET,
                confidence=DOTNET_PROJECT_CONFIDENCE,
                type=FileType.PRIMARY,
            )

        return sniff_file(path)

    def get_best_file(
        self, detected_files: list[DetectedFile], ecosystem_hint: str | None = None
    ) -> DetectedFile | None:
        """Pick the single most relevant file for analysis.

        Args:
            detected_files: Candidates, typically from detect_files()
            ecosystem_hint: Optional ecosystem; ignored if no candidate matches it

        Returns:
            The best candidate, or None if there are none
        """
        if not detected_files:
            return None

        candidates = detected_files
        if ecosystem_hint:
            candidates = [f for f in detected_files if f.ecosystem == ecosystem_hint] or detected_files

        return rank_files(candidates, tolerance=BEST_FILE_TOLERANCE)[0]

    def detect_project_structure(self, detected_files: list[DetectedFile]) -> ProjectStructure:
        """Group detected files by directory and decide whether this is a monorepo."""
        files_by_dir: dict[Path, list[DetectedFile]] = {}
        for detected in detected_files:
            files_by_dir.setdefault(detected.path.parent, []).append(detected)

        subprojects = []
        for directory, files in files_by_dir.items():
            primary = next((f for f in files if f.type == FileType.PRIMARY), None)
            if primary is not None:
                subprojects.append(
                    Subproject(path=directory, ecosystem=primary.ecosystem, file_count=len(files))
                )

        is_monorepo = len(subprojects) > 1

        root_ecosystem = None
        root_primary = next(
            (f for f in files_by_dir.get(self.project_path, []) if f.type == FileType.PRIMARY),
            None,
        )
        if root_primary is not None:
            root_ecosystem = root_primary.ecosystem

        return ProjectStructure(
            is_monorepo=is_monorepo,
            root_ecosystem=root_ecosystem,
            subprojects=tuple(subprojects) if is_monorepo else (),
            total_files=len(detected_files),
        )

    def is_supported(self, ecosystem: str) -> bool:
        return any(definition.name == ecosystem for definition in self.registry)

    def supported_ecosystems(self) -> list[str]:
        return [str(definition.name) for definition in self.registry]

    def display_name(self, ecosystem: str) -> str:
        for definition in self.registry:
            if definition.name == ecosystem:
                return definition.display_name
        return str(ecosystem)

    def _match_registry(self, listing: DirectoryListing) -> list[DetectedFile]:
        matches = []
        for definition in self.registry:
            for file_type, names in definition.files_by_type():
                for name in names:
                    path = listing.path / name
                    if not path.is_file():
                        continue
                    matches.append(
                        DetectedFile(
                            path=path,
                            ecosystem=definition.name,
                            confidence=confidence_for(file_type, listing.depth),
                            type=file_type,
                        )
                    )
                    log.debug(
                        "detector.found",
                        file=name,
                        ecosystem=str(definition.name),
                        type=str(file_type),
                        depth=listing.depth,
                    )
        return matches

    def _match_dotnet(self, listing: DirectoryListing) -> list[DetectedFile]:
        matches = []
        for name in listing.files:
            suffix = Path(name).suffix
            if suffix in DOTNET_PROJECT_EXTENSIONS:
                confidence = DOTNET_PROJECT_CONFIDENCE
            elif suffix == DOTNET_SOLUTION_EXTENSION:
                confidence = DOTNET_SOLUTION_CONFIDENCE
            else:
                continue
            matches.append(
                DetectedFile(
                    path=listing.path / name,
                    ecosystem=Ecosystem.NUGET,
                    confidence=confidence,
                    type=FileType.PRIMARY,
                )
            )
            log.debug("detector.found_dotnet", file=name, depth=listing.depth)
        return matches
