from .user_profile import UserProfile
from .document import Document
from .signatory import Signatory
from .activity import DocumentActivity
from .comment import DocumentComment

__all__ = [
    'UserProfile',
    'Document',
    'Signatory',
    'DocumentActivity',
    'DocumentComment',
]
