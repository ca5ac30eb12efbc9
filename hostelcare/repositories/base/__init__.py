from hostelcare.repositories.base.base_repository import (
    BaseRepository,
    ModelType,
    TenantRepository,
)

__all__ = ["BaseRepository", "TenantRepository", "ModelType"]
