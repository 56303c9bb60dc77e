"""
Validation report generation.

Structures per-row failures from a DataFrame run into a human-readable
report with pass/fail counts and failure details.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class RowFailure:
    """First failing field of one row."""
    index: Any
    field: Optional[str]
    kind: str
    message: str


@dataclass
class ValidationReport:
    """
    Structured output from a DataFrame validation run.

    Attributes:
        name: Name of this validation run.
        rules: Column -> rule expression mapping that was applied.
        failures: One entry per failing row, in row order.
        row_count: Number of rows in the validated DataFrame.
        column_count: Number of columns in the validated DataFrame.
    """
    name: str
    rules: Dict[str, str]
    failures: List[RowFailure] = field(default_factory=list)
    row_count: int = 0
    column_count: int = 0

    @property
    def passed(self) -> bool:
        """True if every row passed."""
        return not self.failures

    @property
    def fail_count(self) -> int:
        return len(self.failures)

    @property
    def pass_count(self) -> int:
        return self.row_count - self.fail_count

    def failures_by_field(self) -> Dict[str, int]:
        """Count of failing rows per field."""
        counts: Dict[str, int] = {}
        for f in self.failures:
            key = f.field or '<record>'
            counts[key] = counts.get(key, 0) + 1
        return counts

    def to_dict(self) -> Dict:
        """Serialize the full report to a dictionary."""
        return {
            'name': self.name,
            'passed': self.passed,
            'rules': dict(self.rules),
            'summary': {
                'rows_checked': self.row_count,
                'columns_checked': self.column_count,
                'rows_passed': self.pass_count,
                'rows_failed': self.fail_count,
                'failures_by_field': self.failures_by_field(),
            },
            'failures': [
                {
                    'index': f.index,
                    'field': f.field,
                    'kind': f.kind,
                    'message': f.message,
                }
                for f in self.failures
            ],
        }

    def print_summary(self) -> None:
        """Print a concise summary to stdout."""
        status = 'PASSED' if self.passed else 'FAILED'
        print(f"\n{'=' * 60}")
        print(f"  Validation: {self.name}")
        print(f"  Status:     {status}")
        print(f"  Rows:       {self.pass_count:,}/{self.row_count:,} passed")
        print(f"  Rules:      {len(self.rules)} columns x {self.column_count} in frame")
        print(f"{'=' * 60}")

    def print_failures(self, limit: int = 20) -> None:
        """Print details of failed rows, up to ``limit`` rows."""
        if not self.failures:
            print("  No failures.")
            return

        print(f"\n  Failures ({self.fail_count}):")
        print(f"  {'-' * 56}")
        for f in self.failures[:limit]:
            print(f"  FAIL  row {f.index}")
            if f.field:
                print(f"        field: {f.field}")
            print(f"        {f.kind}: {f.message}")
            print()
        if self.fail_count > limit:
            print(f"  ... {self.fail_count - limit} more")
