"""
DirectoryProvisioner - Creates the upload and thumbnail directory tree.
"""

import logging
import os
from typing import List, Optional

from .thumbnail_spec import ThumbnailSpecTable
from .upload_config import UploadConfig


class DirectoryProvisioner:
    """
    Ensures the temp directory and every variant directory exist.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def ensure(self, path: str) -> bool:
        """
        Create a directory if it doesn't already exist.

        Returns:
            True if the directory was created, False if it already existed
        """
        if os.path.isdir(path):
            return False
        os.makedirs(path, exist_ok=True)
        self.logger.debug(f"Created directory: {path}")
        return True

    def provision(self, config: UploadConfig, table: ThumbnailSpecTable) -> List[str]:
        """Create all directories needed by the pipeline; return the ones created."""
        created = []
        for path in [config.temp_dir, *config.variant_dirs(table).values()]:
            if self.ensure(path):
                created.append(path)
        if created:
            self.logger.info(f"Provisioned {len(created)} directories under {config.upload_dir}")
        return created

    @staticmethod
    def missing(config: UploadConfig, table: ThumbnailSpecTable) -> List[str]:
        """Variant directories that do not exist."""
        return [path for path in config.variant_dirs(table).values() if not os.path.isdir(path)]
