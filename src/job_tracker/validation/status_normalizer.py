"""
Status normalizer: free-text status labels to JobStatus.

The LLM is asked for one of the JobStatus values but answers vary in case,
language and wording ("OA", "在线测试", "Got an offer"). normalize_status()
is total: anything it does not recognize becomes JobStatus.OTHER.
"""

import re

from job_tracker.models.enums import JobStatus

# Exact matches use table order. The substring pass walks the table backwards
# so that "application withdrawn" or "申请未通过" land on the later stage.
STATUS_KEYWORDS: list[tuple[JobStatus, tuple[str, ...]]] = [
    (JobStatus.APPLIED, ("applied", "application", "申请", "已申请")),
    (JobStatus.ONLINE_ASSESSMENT, ("oa", "online_assessment", "笔试", "在线测试")),
    (JobStatus.INTERVIEW, ("interview", "面试")),
    (JobStatus.OFFER, ("offer", "accepted", "录用", "录取")),
    (JobStatus.REJECTED, ("rejected", "declined", "拒绝", "未通过")),
    (JobStatus.WITHDRAWN, ("withdrawn", "撤回")),
]

_CANONICAL = {status.value.lower(): status for status in JobStatus}

_SEPARATORS = re.compile(r"[\s\-]+")


def _contains_keyword(token: str, keyword: str) -> bool:
    if keyword.isascii():
        # "_" separates words here, so "got_an_offer" matches "offer" but "board" misses "oa"
        return re.search(rf"(?<![a-z0-9]){re.escape(keyword)}(?![a-z0-9])", token) is not None
    return keyword in token


def normalize_status(raw: str) -> JobStatus:
    """
    Map a free-text status label to a JobStatus.

    The label is trimmed, case-folded and has runs of spaces/hyphens read
    as ``_``. Matching then tries:

    1. the canonical JobStatus values ("OnlineAssessment", "Offer", ...)
    2. exact equality with a keyword, in table order
    3. a keyword contained in the label (whole word for ASCII keywords),
       latest stage first: Withdrawn, Rejected, Offer, Interview,
       OnlineAssessment, Applied

    Args:
        raw: Status text from the LLM response

    Returns:
        Matching JobStatus, JobStatus.OTHER when nothing matches
    """
    token = _SEPARATORS.sub("_", (raw or "").strip().casefold())
    if not token:
        return JobStatus.OTHER

    if token in _CANONICAL:
        return _CANONICAL[token]

    for status, keywords in STATUS_KEYWORDS:
        if token in keywords:
            return status

    for status, keywords in reversed(STATUS_KEYWORDS):
        if any(_contains_keyword(token, keyword) for keyword in keywords):
            return status

    return JobStatus.OTHER
