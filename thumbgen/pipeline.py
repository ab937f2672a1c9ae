"""
ThumbnailPipeline - Derives every configured thumbnail variant for one image.
"""

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Optional

from .provisioner import DirectoryProvisioner
from .resize_executor import ResizeExecutor
from .size_format import human_readable_size
from .thumbnail_result import ProcessingManifest, ThumbnailResult
from .thumbnail_spec import DEFAULT_SPEC_TABLE, ThumbnailSpec, ThumbnailSpecTable
from .upload_config import UploadConfig


class ConfigurationError(Exception):
    """Raised when the variant directories the pipeline writes to are missing."""
    pass


class ThumbnailPipeline:
    """
    Resizes one original into every variant of a spec table and reports
    path and size metadata for each.

    A failed variant is recorded in the manifest with its reason and never
    prevents the remaining variants from being attempted.
    """

    def __init__(
        self,
        config: UploadConfig,
        spec_table: ThumbnailSpecTable = DEFAULT_SPEC_TABLE,
        resizer: Optional[ResizeExecutor] = None,
        max_workers: int = 1,
        provision: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize pipeline.

        Args:
            config: Upload configuration (directory layout)
            spec_table: Variants to derive
            resizer: Anything with resize(input, output, width, height) -> ResizeOutcome
            max_workers: Variants resized concurrently (1 = sequential, table order)
            provision: Create missing directories now
            logger: Optional logger instance
        """
        self.config = config
        self.spec_table = spec_table
        self.logger = logger or logging.getLogger(__name__)
        self.resizer = resizer or ResizeExecutor(logger=self.logger)
        self.max_workers = max(1, max_workers)

        if provision:
            DirectoryProvisioner(self.logger).provision(config, spec_table)

    def process_image(self, image_path: str, original_filename: str) -> ProcessingManifest:
        """
        Create all thumbnails for an image.

        Args:
            image_path: Path to the original image
            original_filename: File name used for every derivative

        Returns:
            ProcessingManifest with one entry per variant, in table order

        Raises:
            ConfigurationError: if any variant directory does not exist
        """
        missing = DirectoryProvisioner.missing(self.config, self.spec_table)
        if missing:
            raise ConfigurationError(f"Thumbnail directories missing: {', '.join(missing)}")

        start = time.time()
        filename = os.path.basename(original_filename)

        if self.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                futures = {
                    spec.identifier: pool.submit(self._process_variant, spec, image_path, filename)
                    for spec in self.spec_table
                }
                results: Dict[str, ThumbnailResult] = {
                    key: future.result() for key, future in futures.items()
                }
        else:
            results = {
                spec.identifier: self._process_variant(spec, image_path, filename)
                for spec in self.spec_table
            }

        manifest = ProcessingManifest(original=image_path)
        for spec in self.spec_table:
            manifest.add_result(results[spec.identifier])

        self.logger.info(
            f"Processed {filename}: {len(manifest.produced)} thumbnails generated, "
            f"{len(manifest.failed)} failed ({time.time() - start:.2f}s)"
        )
        return manifest

    def output_path(self, spec: ThumbnailSpec, filename: str) -> str:
        return os.path.join(self.config.variant_dir(spec), filename)

    def _process_variant(self, spec: ThumbnailSpec, image_path: str, filename: str) -> ThumbnailResult:
        """Resize, stat and render one variant."""
        result = ThumbnailResult(identifier=spec.identifier, path=self.output_path(spec, filename))

        try:
            self.logger.debug(f"Resizing {image_path} -> {result.path}")
            outcome = self.resizer.resize(image_path, result.path, spec.width, spec.height)

            # Original size is reported even when the derivative failed
            try:
                result.original_size_bytes = os.stat(image_path).st_size
                result.original_size = human_readable_size(result.original_size_bytes)
            except OSError as e:
                self.logger.warning(f"Cannot stat original {image_path}: {e}")
                if outcome.success:
                    result.error = f"Cannot stat original: {e}"
                    return result

            if not outcome.success:
                result.error = outcome.error or 'resize failed'
                return result

            result.size_bytes = os.stat(result.path).st_size
            result.size = human_readable_size(result.size_bytes)

        except Exception as e:
            self.logger.error(f"Error generating {spec.identifier} for {filename}: {e}")
            result.error = str(e)
            result.size = None
            result.size_bytes = None

        return result
