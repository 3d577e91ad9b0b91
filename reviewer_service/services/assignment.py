# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Reviewer selection. Pure computation, no side effects.

Both policies walk the roster in the order the Directory returned it and keep
the first eligible members. Selection is deterministic and does not look at
how many reviews a member already carries.
"""

from typing import Iterable, Optional

from reviewer_service.core.config import settings
from reviewer_service.models.domain import PullRequest, TeamMember


def eligible_candidates(
    roster: Iterable[TeamMember],
    exclude: Iterable[str],
) -> list[str]:
    """Return active roster members not in ``exclude``, in roster order."""
    excluded = set(exclude)
    return [
        member.user_id
        for member in roster
        if member.is_active and member.user_id not in excluded
    ]


def select_initial_reviewers(
    author_id: str,
    roster: Iterable[TeamMember],
    limit: Optional[int] = None,
) -> list[str]:
    """
    Pick up to ``limit`` reviewers for a new pull request.
    An empty result is valid: the PR is then created without reviewers.
    """
    limit = settings.MAX_REVIEWERS if limit is None else limit
    candidates = []
    for user_id in eligible_candidates(roster, exclude=[author_id]):
        if len(candidates) >= limit:
            break
        # Directory rosters are keyed by user id, but a repeated entry must
        # never produce a duplicate reviewer.
        if user_id in candidates:
            continue
        candidates.append(user_id)
    return candidates


def select_replacement(
    pull_request: PullRequest,
    old_reviewer_id: str,
    roster: Iterable[TeamMember],
) -> Optional[str]:
    """
    Pick the reviewer that takes over from ``old_reviewer_id``.

    ``roster`` is the old reviewer's team, not the author's. Returns None when
    nobody is eligible.
    """
    exclude = [old_reviewer_id, pull_request.author_id, *pull_request.assigned_reviewers]
    candidates = eligible_candidates(roster, exclude=exclude)
    return candidates[0] if candidates else None


def replace_reviewer(reviewers: list[str], old_reviewer_id: str, new_reviewer_id: str) -> list[str]:
    """Return a copy of ``reviewers`` with one entry swapped in place."""
    updated = list(reviewers)
    updated[updated.index(old_reviewer_id)] = new_reviewer_id
    return updated
