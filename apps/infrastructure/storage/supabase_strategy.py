import requests
import logging
from typing import Optional
from urllib.parse import quote
from apps.domain.interfaces.object_storage_strategy import ObjectStorageStrategy, ObjectStorageError

logger = logging.getLogger('apps')


class SupabaseStorageStrategy(ObjectStorageStrategy):
    def __init__(self, base_url: str, api_key: str, bucket: str = 'documents', timeout: int = 30):
        self.base_url = base_url.rstrip('/')
        self.bucket = bucket
        self.timeout = timeout
        self.headers = {
            'Authorization': f'Bearer {api_key}',
            'apikey': api_key,
        }

    def _object_url(self, path: str) -> str:
        return f'{self.base_url}/storage/v1/object/{self.bucket}/{quote(path)}'

    def upload(self, path: str, content: bytes, content_type: Optional[str] = None) -> str:
        headers = {
            **self.headers,
            'Content-Type': content_type or 'application/octet-stream',
            'x-upsert': 'false',
        }

        try:
            response = requests.post(self._object_url(path), data=content, headers=headers, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            error_detail = response.text[:500] if response.text else str(e)
            logger.error(f'Error uploading {path} to storage: {e.response.status_code} - {error_detail}')
            raise ObjectStorageError(f'Failed to upload file: {e.response.status_code} - {error_detail}')
        except requests.exceptions.RequestException as e:
            logger.error(f'Error uploading {path} to storage: {str(e)}')
            raise ObjectStorageError(f'Failed to upload file: {str(e)}')

        return path

    def get_public_url(self, path: str) -> str:
        return f'{self.base_url}/storage/v1/object/public/{self.bucket}/{quote(path)}'

    def delete(self, path: str) -> None:
        url = f'{self.base_url}/storage/v1/object/{self.bucket}'

        try:
            response = requests.delete(url, json={'prefixes': [path]}, headers=self.headers, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error(f'Error deleting {path} from storage: {str(e)}')
            raise ObjectStorageError(f'Failed to delete file: {str(e)}')
