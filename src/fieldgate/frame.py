"""
DataFrame validation.

FrameValidator applies per-column rule expressions to every row of a
DataFrame. Each row is validated like a record: checks run in column
order, clause by clause, and the row stops at its first failure. The
run produces a ValidationReport listing the failing rows.
"""

import logging
from typing import Dict, List, Mapping, Tuple

import pandas as pd

from .checks import Check
from .errors import ValidationError
from .parser import parse_rule
from .report import RowFailure, ValidationReport
from .validator import DeferredError, Field, FieldSet


class FrameValidator:
    """
    Validate DataFrame rows against column rules.

    Usage:
        v = FrameValidator("earthquakes", {
            "id": "nonzero",
            "latitude": "lat",
            "longitude": "lon",
            "magnitude": "gte(0) | lt(10)",
        })
        report = v.validate(df)
        report.print_summary()

    Args:
        name: Name of this validation run.
        rules: Mapping of column name to rule expression.
        registry: CheckRegistry for the rule strings. Defaults to the
            process-wide default registry.
    """

    def __init__(self, name: str, rules: Mapping[str, str], registry=None):
        self.name = name
        self.rules = dict(rules)
        self.registry = registry
        self.logger = logging.getLogger(self.__class__.__name__)

    def _compile(self) -> List[Tuple[str, List[Check]]]:
        return [
            (column, parse_rule(rule, self.registry))
            for column, rule in self.rules.items()
        ]

    def row_fields(self, row: Mapping, compiled: List[Tuple[str, List[Check]]]) -> FieldSet:
        """Build the FieldSet for one row."""
        fields = FieldSet(self.name)
        for column, checks in compiled:
            if column not in row:
                fields.add(DeferredError(ValidationError('column not found', field=column)))
                continue
            value = row[column]
            for check in checks:
                fields.add(Field(column, value, check))
        return fields

    def validate(self, df: pd.DataFrame) -> ValidationReport:
        """
        Run the column rules against every row.

        Returns a ValidationReport with one failure per failing row.
        """
        compiled = self._compile()
        present = [c for c in self.rules if c in df.columns]
        report = ValidationReport(
            name=self.name,
            rules=self.rules,
            row_count=len(df),
            column_count=len(df.columns),
        )

        records = df[present].to_dict('records') if present else [{} for _ in range(len(df))]
        for index, row in zip(df.index, records):
            result = self.row_fields(row, compiled).validate()
            if not result.passed:
                error = result.error
                report.failures.append(RowFailure(
                    index=index,
                    field=error.field,
                    kind=error.kind,
                    message=str(error),
                ))

        self.logger.info(
            "%s: %d/%d rows passed", self.name, report.pass_count, report.row_count,
        )
        return report

    def failing_rows(self, df: pd.DataFrame) -> pd.DataFrame:
        """Return the subset of ``df`` whose rows fail validation."""
        report = self.validate(df)
        return df[df.index.isin([f.index for f in report.failures])]


def validate_frame(df: pd.DataFrame, rules: Dict[str, str], name: str = 'frame',
                   registry=None) -> ValidationReport:
    """Shorthand for ``FrameValidator(name, rules, registry).validate(df)``."""
    return FrameValidator(name, rules, registry).validate(df)
