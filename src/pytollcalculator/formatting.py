"""Human-readable rendering of passage types and daily reports."""

from __future__ import annotations

from .models import DailyReport, PassageType, Window

PASSAGE_TYPE_LABELS: dict[PassageType, str] = {
    PassageType.UNKNOWN: "Unknown",
    PassageType.STANDARD: "Standard (Per Fee Table)",
    PassageType.EXEMPTION_NO_FEE_INTERVAL: "Exemption (No Fee Interval Applies)",
    PassageType.EXEMPTION_WEEKEND: "Exemption (Weekend)",
    PassageType.EXEMPTION_PUBLIC_HOLIDAY: "Exemption (Public Holiday)",
    PassageType.EXEMPTION_PARTIAL_DAILY_MAX: "Partial Exemption (Daily Maximum Reached)",
    PassageType.EXEMPTION_FULL_DAILY_MAX: "Full Exemption (Daily Maximum Reached)",
    PassageType.STANDARD_WINDOW_PEAK: "Standard (Peak in Window)",
    PassageType.EXEMPTION_WINDOW_NON_PEAK: "Exemption (Non-Peak in Window)",
    PassageType.EXEMPTION_VEHICLE_TYPE: "Exemption for Exempt Vehicle Type",
}


def describe_passage_type(passage_type: PassageType) -> str:
    return PASSAGE_TYPE_LABELS[passage_type]


def _branch(window: Window, index: int) -> str:
    if len(window) == 1:
        return " ─"
    if index == 0:
        return "┌─"
    if index == len(window) - 1:
        return "└─"
    return "│ "


def format_daily_report(report: DailyReport, currency: str = "SEK") -> str:
    """Render a report as a tree with one bracket per window."""
    lines = [f"┌─ Daily Report ({report.date:%Y-%m-%d})"]
    for window in report.windows:
        for index, passage in enumerate(window):
            lines.append(
                f"│{_branch(window, index)} {passage.time:%H:%M} "
                f"| Potential {passage.potential_fee:>3} "
                f"| Charged {passage.charged_fee:>3} "
                f"| {describe_passage_type(passage.type)}"
            )
    lines.append(f"└─ Total Fee: {report.total_fee} {currency}")
    return "\n".join(lines)
