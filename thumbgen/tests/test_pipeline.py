"""Tests for ThumbnailPipeline class."""

import os
from unittest.mock import MagicMock

import pytest

from thumbgen.pipeline import ConfigurationError, ThumbnailPipeline
from thumbgen.resize_executor import ResizeExecutor, ResizeOutcome
from thumbgen.size_format import human_readable_size
from thumbgen.thumbnail_spec import DEFAULT_SPEC_TABLE


def failing_for(identifier):
    """Resizer that fails one variant and delegates the rest to Pillow."""
    real = ResizeExecutor()

    def resize(input_path, output_path, width, height):
        if f"{width}x{height}" == identifier:
            return ResizeOutcome.failed('forced failure')
        return real.resize(input_path, output_path, width, height)

    mock = MagicMock(spec=ResizeExecutor)
    mock.resize.side_effect = resize
    return mock


class TestThumbnailPipeline:
    """Tests for ThumbnailPipeline class."""

    def test_init_provisions_directories(self, upload_config, logger):
        """Test construction creates every variant directory."""
        ThumbnailPipeline(upload_config, logger=logger)

        for path in upload_config.variant_dirs(DEFAULT_SPEC_TABLE).values():
            assert os.path.isdir(path)

    def test_process_default_table(self, upload_config, sample_image_file, logger):
        """Test one entry per default variant, keyed by identifier."""
        pipeline = ThumbnailPipeline(upload_config, logger=logger)

        manifest = pipeline.process_image(sample_image_file, 'photo.jpg')

        assert manifest.original == sample_image_file
        assert list(manifest.thumbnails) == DEFAULT_SPEC_TABLE.identifiers
        assert manifest.all_succeeded

    def test_output_paths(self, upload_config, small_spec_table, sample_image_file, logger):
        """Test each derivative lands in its variant directory under the given name."""
        pipeline = ThumbnailPipeline(upload_config, small_spec_table, logger=logger)

        manifest = pipeline.process_image(sample_image_file, 'photo.jpg')

        for spec in small_spec_table:
            result = manifest.thumbnails[spec.identifier]
            assert result.path == os.path.join(upload_config.variant_dir(spec), 'photo.jpg')
            assert os.path.isfile(result.path)

    def test_sizes_come_from_written_files(self, upload_config, small_spec_table, sample_image_file, logger):
        """Test recorded sizes match the files on disk."""
        pipeline = ThumbnailPipeline(upload_config, small_spec_table, logger=logger)

        manifest = pipeline.process_image(sample_image_file, 'photo.jpg')

        original_bytes = os.path.getsize(sample_image_file)
        for result in manifest.thumbnails.values():
            assert result.size_bytes == os.path.getsize(result.path)
            assert result.size == human_readable_size(result.size_bytes)
            assert result.original_size == human_readable_size(original_bytes)

    def test_overwrites_on_same_filename(self, upload_config, small_spec_table, sample_image_file, logger):
        """Test a second run replaces the outputs instead of adding new files."""
        pipeline = ThumbnailPipeline(upload_config, small_spec_table, logger=logger)

        first = pipeline.process_image(sample_image_file, 'photo.jpg')
        second = pipeline.process_image(sample_image_file, 'photo.jpg')

        for spec in small_spec_table:
            assert first.thumbnails[spec.identifier].path == second.thumbnails[spec.identifier].path
            assert os.listdir(upload_config.variant_dir(spec)) == ['photo.jpg']

    def test_filename_is_reduced_to_basename(self, upload_config, small_spec_table, sample_image_file, logger):
        """Test directory components in the name cannot escape the variant directory."""
        pipeline = ThumbnailPipeline(upload_config, small_spec_table, logger=logger)

        manifest = pipeline.process_image(sample_image_file, '../../evil.jpg')

        spec = next(iter(small_spec_table))
        assert manifest.thumbnails[spec.identifier].path == os.path.join(
            upload_config.variant_dir(spec), 'evil.jpg'
        )

    def test_failure_is_isolated(self, upload_config, sample_image_file, logger):
        """Test one failing variant does not stop the other five."""
        resizer = failing_for('250x250')
        pipeline = ThumbnailPipeline(upload_config, resizer=resizer, logger=logger)

        manifest = pipeline.process_image(sample_image_file, 'photo.jpg')

        assert resizer.resize.call_count == 6
        assert manifest.failed == ['250x250']
        assert len(manifest.produced) == 5

        failed = manifest.thumbnails['250x250']
        assert failed.error == 'forced failure'
        assert failed.size is None
        assert failed.original_size is not None

    def test_resizer_exception_is_isolated(self, upload_config, small_spec_table, sample_image_file, logger):
        """Test an exception from the resizer marks only that variant failed."""
        resizer = MagicMock()
        resizer.resize.side_effect = [RuntimeError('codec crashed'), ResizeOutcome.ok()]
        pipeline = ThumbnailPipeline(upload_config, small_spec_table, resizer=resizer, logger=logger)

        manifest = pipeline.process_image(sample_image_file, 'photo.jpg')

        first, second = small_spec_table.identifiers
        assert manifest.thumbnails[first].error == 'codec crashed'
        # the mock reported success without writing, so the stat fails
        assert manifest.thumbnails[second].error is not None
        assert manifest.thumbnails[second].size is None

    def test_invalid_image_marks_all_failed(self, upload_config, small_spec_table, tmp_path, logger):
        """Test an unreadable original yields a failed entry per variant."""
        broken = tmp_path / 'broken.jpg'
        broken.write_bytes(b'not an image')
        pipeline = ThumbnailPipeline(upload_config, small_spec_table, logger=logger)

        manifest = pipeline.process_image(str(broken), 'broken.jpg')

        assert manifest.failed == small_spec_table.identifiers
        assert all(r.original_size == '12 B' for r in manifest.thumbnails.values())

    def test_missing_original(self, upload_config, small_spec_table, tmp_path, logger):
        """Test a missing original fails every variant without raising."""
        pipeline = ThumbnailPipeline(upload_config, small_spec_table, logger=logger)

        manifest = pipeline.process_image(str(tmp_path / 'gone.jpg'), 'gone.jpg')

        assert len(manifest.failed) == 2
        assert all(r.original_size is None for r in manifest.thumbnails.values())

    def test_missing_directories_raise(self, upload_config, small_spec_table, sample_image_file, logger):
        """Test skipping provisioning is caught before any work."""
        resizer = MagicMock()
        pipeline = ThumbnailPipeline(
            upload_config, small_spec_table, resizer=resizer, provision=False, logger=logger
        )

        with pytest.raises(ConfigurationError):
            pipeline.process_image(sample_image_file, 'photo.jpg')

        resizer.resize.assert_not_called()

    def test_parallel_matches_sequential(self, upload_config, sample_image_file, logger):
        """Test a worker pool keeps table order and isolation."""
        resizer = failing_for('1000x1000')
        pipeline = ThumbnailPipeline(upload_config, resizer=resizer, max_workers=4, logger=logger)

        manifest = pipeline.process_image(sample_image_file, 'photo.jpg')

        assert list(manifest.thumbnails) == DEFAULT_SPEC_TABLE.identifiers
        assert manifest.failed == ['1000x1000']
        assert len(manifest.produced) == 5

    def test_max_workers_floor(self, upload_config, small_spec_table, logger):
        """Test non-positive worker counts fall back to sequential."""
        pipeline = ThumbnailPipeline(upload_config, small_spec_table, max_workers=0, logger=logger)
        assert pipeline.max_workers == 1
