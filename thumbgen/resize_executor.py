"""
ResizeExecutor - Writes resized renditions of an image to disk with Pillow.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from PIL import Image, ImageOps


@dataclass(frozen=True)
class ResizeOutcome:
    """Result of a single resize: success flag and failure reason."""
    success: bool
    error: Optional[str] = None

    @classmethod
    def ok(cls) -> 'ResizeOutcome':
        return cls(success=True)

    @classmethod
    def failed(cls, error: str) -> 'ResizeOutcome':
        return cls(success=False, error=error)


class ResizeExecutor:
    """
    Resizes images to exact target dimensions using Pillow.

    The source is scaled to cover the target box and center-cropped, so
    every rendition is exactly width x height.
    """

    OUTPUT_FORMATS = {
        '.jpg': 'JPEG',
        '.jpeg': 'JPEG',
        '.png': 'PNG',
        '.gif': 'GIF',
        '.webp': 'WEBP',
    }

    def __init__(
        self,
        quality: int = 85,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize resize executor.

        Args:
            quality: JPEG/WEBP quality for output (default: 85)
            logger: Optional logger instance
        """
        self.quality = quality
        self.logger = logger or logging.getLogger(__name__)

    def resize(
        self,
        input_path: str,
        output_path: str,
        width: int,
        height: int
    ) -> ResizeOutcome:
        """
        Resize input_path to width x height and save it at output_path.

        Failures are logged and reported in the outcome, never raised.
        """
        try:
            output_format = self._get_output_format(output_path)
            with Image.open(input_path) as img:
                resized = ImageOps.fit(img, (width, height), Image.Resampling.LANCZOS)
                if output_format == 'JPEG':
                    resized = self._convert_color_mode(resized)

                if output_format in ('JPEG', 'WEBP'):
                    resized.save(output_path, format=output_format, quality=self.quality)
                elif output_format == 'PNG':
                    resized.save(output_path, format='PNG', optimize=True)
                else:
                    resized.save(output_path, format=output_format)

            return ResizeOutcome.ok()

        except Exception as e:
            self.logger.error(f"Failed to resize image {input_path} to {width}x{height}. Error: {e}")
            return ResizeOutcome.failed(str(e))

    def _convert_color_mode(self, img: Image.Image) -> Image.Image:
        """Flatten transparency onto white and convert to RGB for JPEG output."""
        if img.mode in ('RGBA', 'LA', 'P'):
            img = img.convert('RGBA')
            background = Image.new('RGB', img.size, (255, 255, 255))
            background.paste(img, mask=img.split()[-1])
            return background
        elif img.mode != 'RGB':
            return img.convert('RGB')
        return img

    def _get_output_format(self, output_path: str) -> str:
        """Determine output format from the destination extension."""
        ext = os.path.splitext(output_path)[1].lower()
        return self.OUTPUT_FORMATS.get(ext, 'JPEG')

