"""
Schemas for packaging results.

A packaging run produces one PackageResult per matched source file. The
folder walker collects them into a WalkSummary instead of relying on
exceptions to signal per-file outcomes.
"""

from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field


class PackageStatus(str, Enum):
    """Outcome of packaging a single source file."""
    CREATED = "created"   # Package written to the target path
    EXISTS = "exists"     # Target already present, file skipped
    FAILED = "failed"     # Packaging raised, nothing written


class PackageResult(BaseModel):
    """Result of packaging one source file."""
    source: Path
    target: Path
    status: PackageStatus
    error: Optional[str] = None
    error_type: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status != PackageStatus.FAILED

    @classmethod
    def created(cls, source: Path, target: Path) -> "PackageResult":
        return cls(source=source, target=target, status=PackageStatus.CREATED)

    @classmethod
    def exists(cls, source: Path, target: Path) -> "PackageResult":
        return cls(source=source, target=target, status=PackageStatus.EXISTS)

    @classmethod
    def failed(cls, source: Path, target: Path, error: BaseException) -> "PackageResult":
        return cls(
            source=source,
            target=target,
            status=PackageStatus.FAILED,
            error=str(error) or error.__class__.__name__,
            error_type=error.__class__.__name__
        )


class WalkSummary(BaseModel):
    """Aggregated results of a folder walk."""
    results: List[PackageResult] = Field(default_factory=list)
    folders: int = 0

    def add(self, result: PackageResult) -> None:
        self.results.append(result)

    def _count(self, status: PackageStatus) -> int:
        return sum(1 for r in self.results if r.status == status)

    @property
    def created(self) -> int:
        return self._count(PackageStatus.CREATED)

    @property
    def skipped(self) -> int:
        return self._count(PackageStatus.EXISTS)

    @property
    def failed(self) -> int:
        return self._count(PackageStatus.FAILED)

    @property
    def failures(self) -> List[PackageResult]:
        return [r for r in self.results if r.status == PackageStatus.FAILED]
