"""
Test result data models.

Shared data structures produced by LaborantTest and consumed by the
pytest bridge in the repository conftest.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class TestStatus(Enum):
    """Test execution status."""

    __test__ = False

    PASS = "pass"
    FAIL = "fail"
    ERROR = "error"
    SKIP = "skip"


@dataclass
class IndividualTestResult:
    """Result from a single test_* method."""

    __test__ = False

    name: str
    status: str  # Use TestStatus.value
    duration: float
    error: Optional[str] = None
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def passed(self) -> bool:
        return self.status == TestStatus.PASS.value

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


@dataclass
class TestFileResult:
    """
    Complete results from one test class execution.

    Contains aggregated stats and individual test results.
    """

    __test__ = False

    schema_version: str
    test_file: str
    component: str
    category: str  # "unit", "integration", "e2e"
    tests: List[IndividualTestResult]
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())
    metadata: dict = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.tests)

    @property
    def passed(self) -> int:
        return sum(1 for t in self.tests if t.status == TestStatus.PASS.value)

    @property
    def failed(self) -> int:
        return sum(1 for t in self.tests if t.status == TestStatus.FAIL.value)

    @property
    def errors(self) -> int:
        return sum(1 for t in self.tests if t.status == TestStatus.ERROR.value)

    @property
    def duration(self) -> float:
        return sum(t.duration for t in self.tests)

    @property
    def success(self) -> bool:
        """Check if all tests passed."""
        return self.failed == 0 and self.errors == 0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        result = asdict(self)
        result["tests"] = [t.to_dict() for t in self.tests]
        result.update(
            total=self.total,
            passed=self.passed,
            failed=self.failed,
            errors=self.errors,
            duration=self.duration,
        )
        return result
