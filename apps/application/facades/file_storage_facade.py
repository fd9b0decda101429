import os
import logging
from datetime import datetime
from typing import Dict, Optional
from django.conf import settings
from django.core.exceptions import PermissionDenied
from django.db.models import Q
from django.utils import timezone
from apps.domain.interfaces.object_storage_strategy import ObjectStorageStrategy, ObjectStorageError
from apps.domain.models import Document
from apps.domain.session import MemberSession, can_remove_upload, upload_owner
from apps.infrastructure.storage.factory import StorageFactory

logger = logging.getLogger('apps')


class FileValidationError(ValueError):
    """Raised when an upload is rejected before reaching the storage backend"""
    pass


class UploadInUseError(ValueError):
    """Raised when removing a stored file that a document still refers to"""
    pass


class FileStorageFacade:
    def __init__(self, storage_factory: Optional[StorageFactory] = None, storage: Optional[ObjectStorageStrategy] = None):
        self.storage_factory = storage_factory or StorageFactory()
        self._storage = storage

    def _get_strategy(self) -> ObjectStorageStrategy:
        if self._storage is not None:
            return self._storage
        return self.storage_factory.get_storage()

    @property
    def max_upload_size(self) -> int:
        return settings.MAX_UPLOAD_SIZE

    @property
    def allowed_extensions(self):
        return [ext.strip().lower().lstrip('.') for ext in settings.ALLOWED_UPLOAD_EXTENSIONS if ext.strip()]

    def validate_file(self, file_name: str, size: int) -> str:
        """Check size and extension, returning the normalized extension."""
        if not file_name:
            raise FileValidationError('A file name is required')

        if size is None or size <= 0:
            raise FileValidationError('The uploaded file is empty')

        if size > self.max_upload_size:
            limit_mb = self.max_upload_size / (1024 * 1024)
            raise FileValidationError(f'File size must be less than {limit_mb:g}MB')

        extension = os.path.splitext(file_name)[1].lower().lstrip('.')
        if not extension or extension not in self.allowed_extensions:
            allowed = ', '.join(ext.upper() for ext in self.allowed_extensions)
            raise FileValidationError(f'Unsupported file type. Allowed types: {allowed}')

        return extension

    def build_path(self, session: MemberSession, extension: str, now: Optional[datetime] = None) -> str:
        now = now or timezone.now()
        timestamp_ms = int(now.timestamp() * 1000)
        return f'{session.user_id}/{timestamp_ms}.{extension}'

    def upload(self, session: MemberSession, uploaded_file) -> Dict[str, str]:
        extension = self.validate_file(uploaded_file.name, uploaded_file.size)
        path = self.build_path(session, extension)

        strategy = self._get_strategy()
        content = b''.join(uploaded_file.chunks())
        stored_path = strategy.upload(path, content, getattr(uploaded_file, 'content_type', None))
        url = strategy.get_public_url(stored_path)

        logger.info(f'User {session.user_id} uploaded {uploaded_file.name} to {stored_path}')
        return {
            'name': uploaded_file.name,
            'url': url,
            'path': stored_path,
        }

    def remove_upload(self, session: MemberSession, path: str) -> bool:
        """
        Delete an upload that was never attached to a document.

        Storage failures are logged and reported through the return value only.
        """
        if upload_owner(path) is None:
            raise FileValidationError('Invalid upload path')

        if not can_remove_upload(session, path):
            raise PermissionDenied('You can only remove your own uploads')

        strategy = self._get_strategy()
        attached = Document.objects.filter(
            Q(file_path=path) | Q(file_url=strategy.get_public_url(path))
        ).exists()
        if attached:
            raise UploadInUseError('This file is attached to a document and cannot be removed')

        try:
            strategy.delete(path)
        except ObjectStorageError as e:
            logger.warning(f'Could not remove pending upload {path}: {str(e)}')
            return False

        logger.info(f'User {session.user_id} removed pending upload {path}')
        return True
