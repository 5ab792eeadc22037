"""Fixpoint propagation of change impact over the import graph."""

import logging
from typing import Iterable

from goimpact.core.models import (
    Cause,
    DependencyTarget,
    ImpactTarget,
    ImportEdge,
    PackageTarget,
)
from goimpact.utils.paths import directory_of

logger = logging.getLogger(__name__)


class ImpactSolver:
    """
    Owns the changed set and grows it until no importer is left unmarked.

    Targets are either first-party packages or third-party dependencies.
    Marks are never removed, so every pass that makes progress marks at least
    one new package and the number of passes is bounded by the package count.
    """

    def __init__(
        self,
        namespace: str,
        match_module_subpackages: bool = True,
        explain: bool = True,
        modules: Iterable[str] = (),
    ) -> None:
        """
        Initialize the solver.

        Args:
            namespace: Module namespace that prefixes first-party import paths
            match_module_subpackages: Treat imports of packages inside a changed
                dependency module as changed
            explain: Record which file caused each propagated mark
            modules: Module paths locked in the "to" tree; an import belongs
                to the longest of them that prefixes it
        """
        self.namespace = namespace
        self.match_module_subpackages = match_module_subpackages
        self.explain = explain
        # Insertion-ordered; the value is always True
        self.changed: dict[ImpactTarget, bool] = {}
        self.explanations: dict[PackageTarget, list[Cause]] = {}
        self._modules: set[str] = set(modules)
        self._changed_modules: set[str] = set()

    def classify(self, identifier: str) -> ImpactTarget:
        """Map an import identifier onto a package or dependency target."""
        if identifier == self.namespace:
            return PackageTarget("")
        if identifier.startswith(self.namespace + "/"):
            return PackageTarget(identifier[len(self.namespace) + 1:])
        return DependencyTarget(identifier)

    def owner_of(self, file_path: str) -> PackageTarget:
        """The package a source file belongs to."""
        return PackageTarget(directory_of(file_path))

    def is_changed(self, target: ImpactTarget) -> bool:
        return self.changed.get(target, False)

    def seed(self, target: ImpactTarget) -> bool:
        """
        Mark a target as changed.

        Returns:
            True if the target was not marked before
        """
        if self.is_changed(target):
            return False
        self.changed[target] = True
        if isinstance(target, DependencyTarget):
            self._modules.add(target.identifier)
            self._changed_modules.add(target.identifier)
        return True

    def seed_paths(self, paths: Iterable[str]) -> None:
        """Mark the owning package of each changed source file."""
        for path in paths:
            self.seed(self.owner_of(path))

    def seed_dependencies(self, identifiers: Iterable[str]) -> None:
        """Mark raw dependency identifiers whose locked version changed."""
        for identifier in identifiers:
            self.seed(DependencyTarget(identifier))

    def imports_changed(self, identifier: str) -> bool:
        """Check if importing an identifier pulls in a change."""
        if self.is_changed(self.classify(identifier)):
            return True
        # Nested modules under the namespace are locked like any dependency
        if identifier in self._changed_modules:
            return True
        if self.match_module_subpackages:
            return self.module_of(identifier) in self._changed_modules
        return False

    def module_of(self, identifier: str) -> str | None:
        """The longest known module path containing an import, if any."""
        prefix = identifier
        while True:
            if prefix in self._modules:
                return prefix
            if "/" not in prefix:
                return None
            prefix = prefix.rsplit("/", 1)[0]

    def propagate(self, edges: Iterable[ImportEdge]) -> bool:
        """
        Run one full pass over the import edges.

        Every file importing something changed marks its own package.

        Returns:
            True if at least one package was newly marked
        """
        progress = False
        for edge in edges:
            owner = self.owner_of(edge.file)
            if self.is_changed(owner):
                continue
            if self.imports_changed(edge.identifier):
                self.seed(owner)
                if self.explain:
                    self.explanations.setdefault(owner, []).append(
                        Cause(file=edge.file, identifier=edge.identifier)
                    )
                progress = True
        return progress

    def solve(self, edges: Iterable[ImportEdge]) -> int:
        """
        Propagate until a fixed point is reached.

        Returns:
            Number of passes made, including the final one without progress
        """
        edges = list(edges)
        passes = 1
        while self.propagate(edges):
            passes += 1
        logger.debug(
            "Fixed point after %d passes, %d targets marked", passes, len(self.changed)
        )
        return passes

    def impacted_packages(self) -> list[PackageTarget]:
        """Changed first-party packages, in the order they were marked."""
        return [target for target in self.changed if isinstance(target, PackageTarget)]

    def impacted_package_ids(self) -> list[str]:
        return [target.package_id(self.namespace) for target in self.impacted_packages()]
