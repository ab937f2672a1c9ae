"""
Pytest fixtures for thumbgen tests.
"""

import io
import pytest


@pytest.fixture
def upload_config(tmp_path):
    """Fixture providing a configuration rooted in a temporary directory."""
    from thumbgen.upload_config import UploadConfig

    return UploadConfig(upload_dir=str(tmp_path / 'uploads'))


@pytest.fixture
def small_spec_table():
    """Fixture providing a two-variant table for fast tests."""
    from thumbgen.thumbnail_spec import ThumbnailSpecTable

    return ThumbnailSpecTable.from_sizes([8, 16])


@pytest.fixture
def sample_image_bytes():
    """Fixture providing sample JPEG image bytes."""
    from PIL import Image

    img = Image.new('RGB', (120, 80), color='red')
    buffer = io.BytesIO()
    img.save(buffer, format='JPEG')
    return buffer.getvalue()


@pytest.fixture
def sample_png_bytes():
    """Fixture providing sample PNG image bytes with transparency."""
    from PIL import Image

    img = Image.new('RGBA', (100, 100), color=(255, 0, 0, 128))
    buffer = io.BytesIO()
    img.save(buffer, format='PNG')
    return buffer.getvalue()


@pytest.fixture
def sample_image_file(tmp_path, sample_image_bytes):
    """Fixture providing a JPEG written to disk."""
    path = tmp_path / 'original.jpg'
    path.write_bytes(sample_image_bytes)
    return str(path)


@pytest.fixture
def sample_png_file(tmp_path, sample_png_bytes):
    """Fixture providing a transparent PNG written to disk."""
    path = tmp_path / 'original.png'
    path.write_bytes(sample_png_bytes)
    return str(path)


@pytest.fixture
def make_upload():
    """Fixture returning a factory for bottle FileUpload objects."""
    from bottle import FileUpload

    def factory(data, filename, content_type='image/jpeg', name='images'):
        headers = {'Content-Type': content_type} if content_type else None
        return FileUpload(io.BytesIO(data), name, filename, headers)

    return factory


@pytest.fixture
def logger():
    """Fixture providing a logger."""
    import logging
    return logging.getLogger('test')
