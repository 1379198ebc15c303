"""Blob storage package."""

from stash.storage.blob_store import BlobStore, S3BlobStore, StorageError, get_blob_store

__all__ = ["BlobStore", "S3BlobStore", "StorageError", "get_blob_store"]
