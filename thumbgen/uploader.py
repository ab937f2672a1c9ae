"""
Uploader - Validates multipart image uploads and stores them under random names.
"""

import logging
import os
import uuid
from dataclasses import dataclass
from mimetypes import guess_type
from typing import List, Optional

from bottle import FileUpload

from .provisioner import DirectoryProvisioner
from .upload_config import UploadConfig


class UploadRejected(Exception):
    """Raised when an upload breaks a mimetype, size or count limit."""
    pass


@dataclass
class StoredUpload:
    """
    An accepted upload saved in the temp directory.

    Attributes:
        original_name: File name as sent by the client
        file_name: Random storage name (uuid4 + original extension)
        path: Absolute path of the stored file
        size: Size in bytes
        mimetype: Content type of the upload
    """
    original_name: str
    file_name: str
    path: str
    size: int
    mimetype: str

    def to_dict(self) -> dict:
        return {
            'originalName': self.original_name,
            'fileName': self.file_name,
            'path': self.path,
            'size': self.size,
            'mimetype': self.mimetype,
        }


def upload_mimetype(upload: FileUpload) -> str:
    """Content type from the multipart part, guessed from the name if absent."""
    if upload.content_type:
        return upload.content_type.split(';')[0].strip().lower()
    mimetype, _ = guess_type(upload.raw_filename or '')
    return mimetype or 'application/octet-stream'


def upload_size(upload: FileUpload) -> int:
    upload.file.seek(0, os.SEEK_END)
    size = upload.file.tell()
    upload.file.seek(0)
    return size


def storage_name(original_name: str) -> str:
    """Random file name keeping the original extension."""
    return f"{uuid.uuid4()}{os.path.splitext(original_name)[1]}"


def accept_uploads(
    uploads: List[FileUpload],
    config: UploadConfig,
    logger: Optional[logging.Logger] = None
) -> List[StoredUpload]:
    """
    Validate every upload, then save them all to the temp directory.

    Nothing is written unless every file passes validation.

    Raises:
        UploadRejected: on a disallowed type, an oversized file or too many files
    """
    logger = logger or logging.getLogger(__name__)

    if len(uploads) > config.max_files:
        raise UploadRejected(f"Too many files: {len(uploads)} (limit {config.max_files})")

    checked = []
    for upload in uploads:
        if len(upload.name or '') > config.max_field_name_size:
            raise UploadRejected("Field name too long")

        mimetype = upload_mimetype(upload)
        if mimetype not in config.allowed_mimetypes:
            raise UploadRejected("Only image files are allowed")

        size = upload_size(upload)
        if size > config.max_file_size:
            raise UploadRejected(
                f"File too large: {upload.raw_filename} ({size} bytes, limit {config.max_file_size})"
            )
        checked.append((upload, mimetype, size))

    DirectoryProvisioner(logger).ensure(config.temp_dir)

    stored = []
    for upload, mimetype, size in checked:
        original_name = upload.raw_filename or ''
        file_name = storage_name(original_name)
        path = os.path.join(config.temp_dir, file_name)
        upload.save(path)
        logger.debug(f"Saved upload {original_name} as {path}")
        stored.append(StoredUpload(
            original_name=original_name,
            file_name=file_name,
            path=path,
            size=size,
            mimetype=mimetype,
        ))

    return stored
