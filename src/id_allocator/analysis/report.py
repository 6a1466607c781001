from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional
import json

from .data_classes import Context, MissingStats


class SeverityLevel(Enum):
    ERROR = "ERROR"
    WARN = "WARN"
    INFO = "INFO"

_ICONS = {
    SeverityLevel.ERROR: "❌",
    SeverityLevel.WARN: "⚠️",
    SeverityLevel.INFO: "ℹ️",
}

@dataclass
class VerificationIssue:
    level: SeverityLevel
    message: str
    column: Optional[str] = None
    row: Optional[int] = None
    hint: Optional[str] = None

@dataclass
class VerificationReport:
    total: int = 0
    valid_count: int = 0
    invalid_count: int = 0
    missing: MissingStats = field(default_factory=MissingStats)
    context: Optional[Context] = None
    issues: list[VerificationIssue] = field(default_factory=list)

    def add(self, issue: VerificationIssue) -> None:
        self.issues.append(issue)

    def is_valid(self) -> bool:
        return not any(i.level == SeverityLevel.ERROR for i in self.issues)

    def summary(self) -> str:
        by = {SeverityLevel.ERROR: 0, SeverityLevel.WARN: 0, SeverityLevel.INFO: 0}
        for i in self.issues:
            by[i.level] += 1
        return (
            f"{self.total} row(s): {self.valid_count} valid, {self.invalid_count} invalid; "
            f"{by[SeverityLevel.ERROR]} error(s), {by[SeverityLevel.WARN]} warning(s), {by[SeverityLevel.INFO]} info"
        )

    def render_text_report(self) -> str:
        lines = [self.summary()]
        by_column = defaultdict(list)

        for issue in self.issues:
            by_column[issue.column or "(dataset)"].append(issue)

        for column, issues in sorted(by_column.items()):
            lines.append(f"\n📦 {column}")
            for i in issues:
                icon = _ICONS[i.level]
                hint = f" Hint: {i.hint}" if i.hint else ""
                row = f" (row: {i.row})" if i.row is not None else ""
                lines.append(f"  {icon} {i.message}{row}{hint}")

        return "\n".join(lines)

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "valid": self.valid_count,
            "invalid": self.invalid_count,
            "missing": self.missing.to_dict(),
            "summary": {
                "error": sum(i.level == SeverityLevel.ERROR for i in self.issues),
                "warn": sum(i.level == SeverityLevel.WARN for i in self.issues),
                "info": sum(i.level == SeverityLevel.INFO for i in self.issues),
            },
            "issues": [
                {
                    "level": i.level.value,
                    "message": i.message,
                    "column": i.column,
                    "row": i.row,
                    "hint": i.hint,
                }
                for i in self.issues
            ],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    def exit_code(self) -> int:
        return 0 if self.is_valid() else 1
