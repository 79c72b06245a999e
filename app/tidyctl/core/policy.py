"""Extension policy filtering.

Pure functions deciding which candidate files are eligible for cleanup
under a FilterPolicy. Exclude rules are checked before include rules.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from tidyctl.config import FilterPolicy


class PolicyVerdict(Enum):
    """Why a path was accepted or rejected."""

    INCLUDED = "included"
    EXCLUDED = "excluded"
    NOT_INCLUDED = "not_included"


@dataclass(frozen=True, slots=True)
class PolicyDecision:
    """Verdict for one path, with the suffix that decided it.

    Attributes:
        path: The path that was checked.
        verdict: Accept/reject reason.
        suffix: Matching suffix, or None when no rule matched.
    """

    path: str
    verdict: PolicyVerdict
    suffix: str | None = None

    @property
    def accepted(self) -> bool:
        """Check if the path is eligible for cleanup."""
        return self.verdict == PolicyVerdict.INCLUDED


def _first_match(name: str, suffixes: list[str]) -> str | None:
    for suffix in suffixes:
        if name.endswith(suffix):
            return suffix
    return None


def explain(path: str, policy: FilterPolicy) -> PolicyDecision:
    """Decide whether ``path`` is eligible and report which rule decided.

    Args:
        path: File path to check.
        policy: Include/exclude rules.

    Returns:
        PolicyDecision for the path.
    """
    name = path.lower()

    excluded_by = _first_match(name, policy.exclude_suffixes)
    if excluded_by is not None:
        return PolicyDecision(path=path, verdict=PolicyVerdict.EXCLUDED, suffix=excluded_by)

    included_by = _first_match(name, policy.include_suffixes)
    if included_by is not None:
        return PolicyDecision(path=path, verdict=PolicyVerdict.INCLUDED, suffix=included_by)

    return PolicyDecision(path=path, verdict=PolicyVerdict.NOT_INCLUDED)


def is_eligible(path: str, policy: FilterPolicy) -> bool:
    """Check if ``path`` passes the policy."""
    return explain(path, policy).accepted


def filter_candidates(candidates: Iterable[str], policy: FilterPolicy) -> list[str]:
    """Return the eligible candidates, sorted.

    Args:
        candidates: Paths to filter.
        policy: Include/exclude rules.

    Returns:
        Eligible paths in sorted order.
    """
    return sorted(path for path in set(candidates) if is_eligible(path, policy))
