"""Impact analysis between two snapshots."""

import logging

from goimpact.analysis.impact_solver import ImpactSolver
from goimpact.analysis.models import CauseRecord, ImpactResult, PackageImpact
from goimpact.core.config import ImpactConfig
from goimpact.core.models import ImportEdge, PathChange
from goimpact.indexing.manifest import (
    LockMap,
    dependency_delta,
    read_lock_map,
    read_namespace,
)
from goimpact.indexing.parsers import BaseParser, GoImportParser
from goimpact.tracking.differ import diff_snapshots
from goimpact.tracking.git_tracker import Credentials, GitTracker
from goimpact.tracking.snapshot import Snapshot

logger = logging.getLogger(__name__)


class ImpactAnalyzer:
    """Computes the packages impacted by the change from one snapshot to another."""

    def __init__(
        self,
        from_snapshot: Snapshot,
        to_snapshot: Snapshot,
        config: ImpactConfig | None = None,
        parser: BaseParser | None = None,
    ) -> None:
        """
        Initialize the impact analyzer.

        Args:
            from_snapshot: The older tree
            to_snapshot: The tree being analyzed
            config: Analysis settings (defaults apply when omitted)
            parser: Header parser for source files
        """
        self.from_snapshot = from_snapshot
        self.to_snapshot = to_snapshot
        self.config = config or ImpactConfig()
        self.parser = parser or GoImportParser(self.config.constraint_directives)

    def changes(self) -> list[PathChange]:
        """Raw path changes between the two trees."""
        return diff_snapshots(self.from_snapshot, self.to_snapshot)

    def changed_sources(self, changes: list[PathChange]) -> list[str]:
        """Changed paths that are source files, build-constrained or not."""
        return [c.path for c in changes if self.config.is_source_file(c.path)]

    def lock_maps(self) -> tuple[LockMap, LockMap]:
        """The "from" and "to" lock maps."""
        return (
            read_lock_map(self.from_snapshot, self.config.lock_file),
            read_lock_map(self.to_snapshot, self.config.lock_file),
        )

    def changed_dependencies(self) -> list[str]:
        """Dependencies whose locked fingerprint differs in the "to" tree."""
        return dependency_delta(*self.lock_maps())

    def import_edges(self) -> list[ImportEdge]:
        """
        Parse every source file of the "to" tree into import edges.

        Build-constrained files contribute no edges. A parse failure in any
        file aborts the analysis.
        """
        edges: list[ImportEdge] = []
        skipped = 0
        for path in self.to_snapshot.iter_files(self.config.source_extensions):
            header = self.parser.parse_header(path, self.to_snapshot.read(path))
            if header.build_constrained:
                skipped += 1
                continue
            edges.extend(ImportEdge(file=path, identifier=i) for i in header.imports)
        logger.debug("Collected %d import edges, %d constrained files skipped", len(edges), skipped)
        return edges

    def analyze(self, explain: bool = False) -> ImpactResult:
        """
        Run the full analysis.

        Args:
            explain: Record the importing file behind each propagated package

        Returns:
            ImpactResult with the impacted packages
        """
        changes = self.changes()
        sources = self.changed_sources(changes)
        namespace = read_namespace(self.to_snapshot, self.config.manifest_file)
        from_map, to_map = self.lock_maps()
        delta = dependency_delta(from_map, to_map)
        logger.info(
            "%d paths changed (%d sources), %d dependencies changed",
            len(changes),
            len(sources),
            len(delta),
        )

        edges = self.import_edges()

        solver = ImpactSolver(
            namespace,
            match_module_subpackages=self.config.match_module_subpackages,
            explain=explain,
            modules=to_map,
        )
        solver.seed_paths(sources)
        solver.seed_dependencies(delta)
        passes = solver.solve(edges)

        packages = [
            PackageImpact(
                package=target.package_id(namespace),
                directory=target.directory,
                causes=[
                    CauseRecord(file=cause.file, imports=cause.identifier)
                    for cause in solver.explanations.get(target, [])
                ],
            )
            for target in solver.impacted_packages()
        ]
        logger.info("%d packages impacted", len(packages))

        return ImpactResult(
            namespace=namespace,
            from_commit=self.from_snapshot.commit_id,
            to_commit=self.to_snapshot.commit_id,
            changed_paths=[c.path for c in changes],
            changed_dependencies=delta,
            packages=packages,
            passes=passes,
        )


def analyze_repository(
    location: str,
    from_ref: str,
    to_ref: str,
    branch: str | None = None,
    credentials: Credentials | None = None,
    config: ImpactConfig | None = None,
    explain: bool = False,
) -> ImpactResult:
    """
    Open (or clone) a repository and analyze the change between two commits.

    Args:
        location: file://<path>, a local directory, or a clone URL
        from_ref: The older commit
        to_ref: The commit being analyzed
        branch: Branch to clone
        credentials: HTTP credentials for cloning
        config: Analysis settings
        explain: Record the importing file behind each propagated package

    Returns:
        ImpactResult with the impacted packages
    """
    config = config or ImpactConfig()
    with GitTracker.open(location, branch, credentials, config.ambiguous_prefix) as tracker:
        from_snapshot = tracker.snapshot(from_ref)
        to_snapshot = tracker.snapshot(to_ref)
        return ImpactAnalyzer(from_snapshot, to_snapshot, config).analyze(explain=explain)
