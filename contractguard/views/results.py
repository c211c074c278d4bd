"""
Results step.

Turns an AnalysisResult into what the report shows: severity counts, a
zero-state when there are no red flags, and the three lists exactly in the
order the model returned them.
"""

from dataclasses import dataclass
from typing import List, Tuple

from ..models.schemas import AnalysisResult, NegotiableTerm, RedFlag, Severity

NO_ISSUES_MESSAGE = "No major issues found"

SEVERITY_LABELS = {
    Severity.HIGH: "High risk",
    Severity.MEDIUM: "Medium risk",
    Severity.LOW: "Low risk",
}


@dataclass(frozen=True)
class ResultsView:
    summary: str
    red_flags: Tuple[RedFlag, ...]
    negotiable_terms: Tuple[NegotiableTerm, ...]
    questions_to_ask: Tuple[str, ...]
    high_count: int
    medium_count: int
    low_count: int

    @classmethod
    def from_result(cls, result: AnalysisResult) -> "ResultsView":
        flags = tuple(result.red_flags)
        return cls(
            summary=result.summary,
            red_flags=flags,
            negotiable_terms=tuple(result.negotiable_terms),
            questions_to_ask=tuple(result.questions_to_ask),
            high_count=sum(1 for f in flags if f.severity == Severity.HIGH),
            medium_count=sum(1 for f in flags if f.severity == Severity.MEDIUM),
            low_count=sum(1 for f in flags if f.severity == Severity.LOW),
        )

    @property
    def has_red_flags(self) -> bool:
        return bool(self.red_flags)

    def render_text(self) -> str:
        """Plain-text report, e.g. for an email body or a terminal."""
        lines: List[str] = ["CONTRACT ANALYSIS", "", "Summary", self.summary, ""]

        lines.append(
            f"Red flags: {self.high_count} high, "
            f"{self.medium_count} medium, {self.low_count} low"
        )
        if not self.has_red_flags:
            lines.append(NO_ISSUES_MESSAGE)
        for flag in self.red_flags:
            lines.append(f"- [{SEVERITY_LABELS[flag.severity]}] {flag.issue}")
            lines.append(f"  {flag.explanation}")
        lines.append("")

        if self.negotiable_terms:
            lines.append("Negotiable terms")
            for term in self.negotiable_terms:
                lines.append(f"- {term.term}")
                lines.append(f"  Suggestion: {term.suggestion}")
            lines.append("")

        if self.questions_to_ask:
            lines.append("Questions to ask")
            for number, question in enumerate(self.questions_to_ask, start=1):
                lines.append(f"{number}. {question}")

        return "\n".join(lines).rstrip() + "\n"
