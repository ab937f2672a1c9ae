"""
UploadConfig - Directory layout, upload limits and server settings.
"""

import os
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .thumbnail_spec import ThumbnailSpec, ThumbnailSpecTable

ALLOWED_MIMETYPES = ('image/png', 'image/jpeg', 'image/jpg')


@dataclass(frozen=True)
class UploadConfig:
    """
    Configuration for storing uploads and their thumbnails.

    Attributes:
        upload_dir: Root of the upload tree
        max_file_size: Per-file limit in bytes
        max_files: Maximum number of files in one request
        max_field_name_size: Maximum length of a multipart field name
        allowed_mimetypes: Accepted image content types
        workers: Thread pool size for variant resizing (1 = sequential)
        host: Address the HTTP server binds to
        port: Port the HTTP server listens on
    """
    upload_dir: str = 'uploads'
    max_file_size: int = 2 * 1024 * 1024
    max_files: int = 200
    max_field_name_size: int = 100
    allowed_mimetypes: Tuple[str, ...] = field(default=ALLOWED_MIMETYPES)
    workers: int = 1
    host: str = '0.0.0.0'
    port: int = 8000

    @classmethod
    def from_env(cls) -> 'UploadConfig':
        """Create configuration from environment variables."""
        return cls(
            upload_dir=os.getenv('THUMBGEN_UPLOAD_DIR', 'uploads'),
            max_file_size=int(os.getenv('THUMBGEN_MAX_FILE_SIZE', str(2 * 1024 * 1024))),
            max_files=int(os.getenv('THUMBGEN_MAX_FILES', '200')),
            workers=int(os.getenv('THUMBGEN_WORKERS', '1')),
            host=os.getenv('HOST', '0.0.0.0'),
            port=int(os.getenv('PORT', '8000')),
        )

    @property
    def temp_dir(self) -> str:
        """Directory where accepted uploads are stored."""
        return os.path.join(os.path.abspath(self.upload_dir), 'temp')

    @property
    def thumbs_dir(self) -> str:
        return os.path.join(self.temp_dir, 'thumbs')

    def variant_dir(self, spec: ThumbnailSpec) -> str:
        """Directory holding derivatives for one variant."""
        return os.path.join(self.thumbs_dir, spec.identifier)

    def variant_dirs(self, table: ThumbnailSpecTable) -> Dict[str, str]:
        return {spec.identifier: self.variant_dir(spec) for spec in table}

    def validate(self) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []
        if not self.upload_dir:
            errors.append("THUMBGEN_UPLOAD_DIR must not be empty")
        if self.max_file_size <= 0:
            errors.append(f"THUMBGEN_MAX_FILE_SIZE must be positive (got {self.max_file_size})")
        if self.max_files <= 0:
            errors.append(f"THUMBGEN_MAX_FILES must be positive (got {self.max_files})")
        if self.workers <= 0:
            errors.append(f"THUMBGEN_WORKERS must be positive (got {self.workers})")
        if not 0 < self.port < 65536:
            errors.append(f"PORT out of range: {self.port}")
        return errors
