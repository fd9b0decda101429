import threading
import logging
from typing import Dict, Optional
from django.conf import settings
from apps.domain.interfaces.object_storage_strategy import ObjectStorageStrategy
from .django_strategy import DjangoStorageStrategy
from .supabase_strategy import SupabaseStorageStrategy

logger = logging.getLogger('apps')


class StorageFactory:
    _instance = None
    _lock = threading.Lock()
    _strategies_cache: Dict[str, ObjectStorageStrategy] = {}

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super(StorageFactory, cls).__new__(cls)
        return cls._instance

    def get_storage(self, backend: Optional[str] = None) -> ObjectStorageStrategy:
        backend = (backend or settings.OBJECT_STORAGE_BACKEND).lower()

        if backend not in self._strategies_cache:
            with self._lock:
                if backend not in self._strategies_cache:
                    self._strategies_cache[backend] = self._create_strategy(backend)

        return self._strategies_cache[backend]

    def _create_strategy(self, backend: str) -> ObjectStorageStrategy:
        if backend == 'django':
            return DjangoStorageStrategy()

        if backend == 'supabase':
            base_url = getattr(settings, 'SUPABASE_URL', None)
            api_key = getattr(settings, 'SUPABASE_SERVICE_KEY', None)
            if not base_url or not api_key:
                raise ValueError('SUPABASE_URL and SUPABASE_SERVICE_KEY must be configured for supabase storage')
            logger.info(f'Using Supabase storage bucket {settings.STORAGE_BUCKET}')
            return SupabaseStorageStrategy(
                base_url,
                api_key,
                bucket=settings.STORAGE_BUCKET,
                timeout=settings.STORAGE_TIMEOUT,
            )

        raise ValueError(f'Unknown storage backend: {backend}')

    def clear_cache(self):
        with self._lock:
            self._strategies_cache.clear()
