"""Result models for impact analysis."""

from pydantic import BaseModel, Field


class CauseRecord(BaseModel):
    """A file whose import pulled a package into the impacted set."""

    file: str = Field(..., description="Repository-relative path of the importing file")
    imports: str = Field(..., description="The changed identifier it imports")


class PackageImpact(BaseModel):
    """One impacted first-party package."""

    package: str = Field(..., description="Package import path")
    directory: str = Field(..., description="Repository-relative directory, '' for the root")
    causes: list[CauseRecord] = Field(
        default_factory=list, description="Empty when the package changed directly"
    )


class ImpactResult(BaseModel):
    """Outcome of comparing two commits."""

    namespace: str
    from_commit: str
    to_commit: str
    changed_paths: list[str] = Field(default_factory=list, description="All paths that differ")
    changed_dependencies: list[str] = Field(default_factory=list)
    packages: list[PackageImpact] = Field(
        default_factory=list, description="Impacted packages in the order they were marked"
    )
    passes: int = Field(0, description="Propagation passes until the fixed point")

    @property
    def package_ids(self) -> list[str]:
        return [p.package for p in self.packages]
