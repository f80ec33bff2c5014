"""Role and visa-sponsorship relevance filter for canonical jobs."""

import re

from jobtracker.services.sources.base import CanonicalJob

# Substrings that mark a posting as one of the tracked roles
ROLE_KEYWORDS = (
    "virtual assistant",
    "admin",
    "administrative",
    "data entry",
    "office assistant",
)

VISA_PATTERN = re.compile(r"(visa|sponsor(ship)?|work\s*permit)", re.IGNORECASE)


def build_haystack(job: CanonicalJob) -> str:
    return " ".join(
        [
            job.title,
            job.company,
            job.description or "",
            " ".join(job.tags or []),
        ]
    ).lower()


def matches_criteria(job: CanonicalJob, require_visa: bool) -> bool:
    """
    Decide whether a job matches the tracked roles.

    A job matches when its text contains at least one role keyword and,
    if ``require_visa`` is set, also mentions visa, sponsorship or a work permit.
    """
    haystack = build_haystack(job)

    has_role = any(keyword in haystack for keyword in ROLE_KEYWORDS)
    if not has_role:
        return False
    if not require_visa:
        return True
    return VISA_PATTERN.search(haystack) is not None
