"""
ThumbnailResult and ProcessingManifest - What one pipeline run produced.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class ThumbnailResult:
    """
    Outcome for a single thumbnail variant.

    Attributes:
        identifier: Variant key (e.g. '150x150')
        path: Where the derivative was (or would have been) written
        size: Rendered size of the derivative, None if it was not produced
        original_size: Rendered size of the original, None if it could not be read
        size_bytes: Derivative size in bytes
        original_size_bytes: Original size in bytes
        error: Failure reason, None on success
    """
    identifier: str
    path: str
    size: Optional[str] = None
    original_size: Optional[str] = None
    size_bytes: Optional[int] = None
    original_size_bytes: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        """Convert to the external manifest entry shape."""
        data = {
            'path': self.path,
            'size': self.size,
            'originalSize': self.original_size,
        }
        if self.error is not None:
            data['error'] = self.error
        return data


@dataclass
class ProcessingManifest:
    """
    An original image and every derivative produced from it.

    Attributes:
        original: Path of the original image
        thumbnails: Dict mapping variant identifier -> ThumbnailResult, in table order
    """
    original: str
    thumbnails: Dict[str, ThumbnailResult] = field(default_factory=dict)

    def add_result(self, result: ThumbnailResult) -> None:
        self.thumbnails[result.identifier] = result

    @property
    def produced(self) -> List[str]:
        """Identifiers of variants written successfully."""
        return [key for key, result in self.thumbnails.items() if result.ok]

    @property
    def failed(self) -> List[str]:
        return [key for key, result in self.thumbnails.items() if not result.ok]

    @property
    def all_succeeded(self) -> bool:
        return not self.failed

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'original': self.original,
            'thumbnails': {
                key: result.to_dict()
                for key, result in self.thumbnails.items()
            },
        }
