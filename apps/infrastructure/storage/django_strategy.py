import logging
from typing import Optional
from django.core.exceptions import SuspiciousFileOperation
from django.core.files.base import ContentFile
from django.core.files.storage import Storage, default_storage
from apps.domain.interfaces.object_storage_strategy import ObjectStorageStrategy, ObjectStorageError

logger = logging.getLogger('apps')


class DjangoStorageStrategy(ObjectStorageStrategy):
    """Stores objects through a Django storage backend (MEDIA_ROOT by default)."""

    def __init__(self, storage: Optional[Storage] = None):
        self.storage = storage or default_storage

    def upload(self, path: str, content: bytes, content_type: Optional[str] = None) -> str:
        if self.storage.exists(path):
            raise ObjectStorageError(f'Object already exists: {path}')

        try:
            return self.storage.save(path, ContentFile(content))
        except (OSError, SuspiciousFileOperation) as e:
            logger.error(f'Error saving {path} to storage: {str(e)}')
            raise ObjectStorageError(f'Failed to upload file: {str(e)}')

    def get_public_url(self, path: str) -> str:
        return self.storage.url(path)

    def delete(self, path: str) -> None:
        try:
            self.storage.delete(path)
        except (OSError, SuspiciousFileOperation) as e:
            logger.error(f'Error deleting {path} from storage: {str(e)}')
            raise ObjectStorageError(f'Failed to delete file: {str(e)}')
