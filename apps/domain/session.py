"""
Member session and authorization helpers.

Views build a ``MemberSession`` from the authenticated user and pass it down to
the services; every authorization rule is a plain function of that value.
"""
import re
from dataclasses import dataclass
from typing import Optional

from apps.domain.models import UserProfile


@dataclass(frozen=True)
class MemberSession:
    user_id: int
    full_name: str
    role: str = UserProfile.ROLE_MEMBER

    @classmethod
    def from_user(cls, user) -> 'MemberSession':
        profile: Optional[UserProfile] = getattr(user, 'profile', None)
        if profile is None:
            return cls(user_id=user.pk, full_name=user.get_username())
        return cls(user_id=user.pk, full_name=profile.full_name, role=profile.role)


def is_admin(session: Optional[MemberSession]) -> bool:
    return session is not None and session.role == UserProfile.ROLE_ADMIN


def can_manage_document(session: Optional[MemberSession], document) -> bool:
    """Creators manage their own documents, admins manage all of them."""
    if session is None:
        return False
    return is_admin(session) or document.created_by_id == session.user_id


def can_decide_approval(session: Optional[MemberSession], document) -> bool:
    return is_admin(session) and document.requires_admin_approval


UPLOAD_PATH_RE = re.compile(r'(\d+)/([A-Za-z0-9][A-Za-z0-9_.-]*)')


def upload_owner(path: Optional[str]) -> Optional[int]:
    """Return the owner id of a stored upload path, or None when the path is not exactly "<user_id>/<name>"."""
    match = UPLOAD_PATH_RE.fullmatch(path or '')
    if match is None:
        return None
    return int(match.group(1))


def can_remove_upload(session: Optional[MemberSession], path: str) -> bool:
    owner = upload_owner(path)
    if session is None or owner is None:
        return False
    return is_admin(session) or owner == session.user_id
