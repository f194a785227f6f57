"""Record deduplication by display name."""

from typing import List

from ..models import ScrapedSake


def dedupe_by_name(sakes: List[ScrapedSake]) -> List[ScrapedSake]:
    """
    Drop records whose name (exact, case-sensitive) appeared earlier.

    The first occurrence is kept and page order is preserved.
    """
    seen = set()
    unique = []
    for sake in sakes:
        if sake.name in seen:
            continue
        seen.add(sake.name)
        unique.append(sake)
    return unique
