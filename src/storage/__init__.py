"""
Storage Module - Bucket/path object storage for avatars and company assets.
"""

from src.storage.service import ObjectStorage

__all__ = ["ObjectStorage"]
