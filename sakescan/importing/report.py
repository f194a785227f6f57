"""
Review Summaries

Plain-text summaries of match and import results for the admin review
flow (CLI output, result banners).
"""

from typing import List

from ..models import ImportResult, MatchResult


def format_match_summary(result: MatchResult) -> str:
    """One-line totals for the review step."""
    return (
        f"{result.total_matched} matched, "
        f"{result.total_updates} image updates, "
        f"{result.total_new} new sakes"
    )


def format_import_summary(result: ImportResult, max_errors: int = 3) -> str:
    """
    Summarize an import batch.

    Shows the counts, then the first max_errors error messages and an
    "...and N more" line when there are more.
    """
    lines: List[str] = [
        f"Updated {result.updated_count} sakes, inserted {result.inserted_count} new sakes"
    ]
    if result.errors:
        lines.append(f"{len(result.errors)} errors:")
        for error in result.errors[:max_errors]:
            lines.append(f"  - {error}")
        remaining = len(result.errors) - max_errors
        if remaining > 0:
            lines.append(f"  ...and {remaining} more")
    return "\n".join(lines)
