from pathlib import Path

from constructia.config.settings import Settings
from constructia.storage.base import BaseFileStorage
from constructia.storage.local_adapter import LocalFileStorage
from constructia.storage.supabase_adapter import SupabaseStorage


class StorageFactory:
    """Creates the file storage adapter selected by settings."""

    DRIVERS = ("local", "supabase")

    @classmethod
    def create(cls, settings: Settings) -> BaseFileStorage:
        driver = settings.storage_driver.lower()
        if driver == "local":
            return LocalFileStorage(files_root=Path(settings.files_root))
        if driver == "supabase":
            if not settings.storage_supabase_url or not settings.storage_supabase_service_key:
                raise ValueError(
                    "storage_supabase_url and storage_supabase_service_key are "
                    "required for storage_driver=supabase"
                )
            return SupabaseStorage(
                base_url=settings.storage_supabase_url,
                service_key=settings.storage_supabase_service_key,
                bucket=settings.storage_bucket,
                timeout_seconds=settings.storage_timeout_seconds,
            )
        raise ValueError(
            f"Unknown storage driver '{driver}'. Choose from: {list(cls.DRIVERS)}"
        )
