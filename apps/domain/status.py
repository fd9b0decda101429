"""
Document status rules.

The persisted ``Document.status`` is a summary of the signatory set and of the
admin decision. Every write path recomputes it with ``compute_document_status``
so the stored value never disagrees with the rows it summarizes.
"""
from typing import Iterable, NamedTuple, Optional

PENDING = 'pending'
IN_PROGRESS = 'in_progress'
COMPLETED = 'completed'
REJECTED = 'rejected'


class SignatureProgress(NamedTuple):
    signed: int
    total: int
    percentage: int


def approval_allows_completion(requires_admin_approval: bool, admin_approved: Optional[bool]) -> bool:
    # An undecided approval does not block completion, only an explicit rejection does
    return not requires_admin_approval or admin_approved is not False


def compute_document_status(
    current_status: str,
    signed_flags: Iterable[bool],
    requires_admin_approval: bool,
    admin_approved: Optional[bool],
) -> str:
    """
    Return the status a document must hold for the given signatures and approval.

    An admin rejection wins over everything else, so rejecting a fully signed
    document takes it out of ``completed``.
    """
    flags = [bool(flag) for flag in signed_flags]

    if not approval_allows_completion(requires_admin_approval, admin_approved):
        return REJECTED

    if all(flags):
        return COMPLETED

    if any(flags) or current_status != PENDING:
        return IN_PROGRESS

    return PENDING


def signature_progress(signed_flags: Iterable[bool]) -> SignatureProgress:
    flags = [bool(flag) for flag in signed_flags]
    total = len(flags)
    signed = sum(flags)

    if total == 0:
        return SignatureProgress(signed=0, total=0, percentage=0)

    # Integer half-up rounding
    percentage = (200 * signed + total) // (2 * total)
    return SignatureProgress(signed=signed, total=total, percentage=max(0, min(100, percentage)))
