from .django_strategy import DjangoStorageStrategy
from .supabase_strategy import SupabaseStorageStrategy
from .factory import StorageFactory

__all__ = ['DjangoStorageStrategy', 'SupabaseStorageStrategy', 'StorageFactory']
