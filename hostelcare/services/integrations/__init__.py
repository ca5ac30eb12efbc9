from hostelcare.services.integrations.blob_store import (
    BlobStore,
    CloudinaryBlobStore,
    get_blob_store,
)

__all__ = ["BlobStore", "CloudinaryBlobStore", "get_blob_store"]
