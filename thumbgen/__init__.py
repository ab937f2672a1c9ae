"""
Image Upload & Thumbnail Package

Accepts uploaded images and derives a fixed set of resized thumbnails:
    1. Upload: validate and store each image under a random name
    2. Derive: resize the stored original into every configured variant
    3. Report: return path and human-readable size for original and thumbnails
"""

__version__ = "1.0.0"

from .size_format import human_readable_size
from .thumbnail_spec import ThumbnailSpec, ThumbnailSpecTable, DEFAULT_SPEC_TABLE
from .upload_config import UploadConfig
from .provisioner import DirectoryProvisioner
from .resize_executor import ResizeExecutor, ResizeOutcome
from .thumbnail_result import ThumbnailResult, ProcessingManifest
from .pipeline import ThumbnailPipeline, ConfigurationError
from .uploader import StoredUpload, UploadRejected, accept_uploads

__all__ = [
    "human_readable_size",
    "ThumbnailSpec",
    "ThumbnailSpecTable",
    "DEFAULT_SPEC_TABLE",
    "UploadConfig",
    "DirectoryProvisioner",
    "ResizeExecutor",
    "ResizeOutcome",
    "ThumbnailResult",
    "ProcessingManifest",
    "ThumbnailPipeline",
    "ConfigurationError",
    "StoredUpload",
    "UploadRejected",
    "accept_uploads",
]
