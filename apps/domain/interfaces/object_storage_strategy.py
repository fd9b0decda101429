from abc import ABC, abstractmethod
from typing import Optional


class ObjectStorageError(Exception):
    """Raised when the object storage backend fails an operation"""
    pass


class ObjectStorageStrategy(ABC):
    @abstractmethod
    def upload(self, path: str, content: bytes, content_type: Optional[str] = None) -> str:
        pass

    @abstractmethod
    def get_public_url(self, path: str) -> str:
        pass

    @abstractmethod
    def delete(self, path: str) -> None:
        pass
