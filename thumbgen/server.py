"""
HTTP front end: accepts image uploads and returns their thumbnail manifests.
"""

import json
import logging
from typing import List, Optional

from bottle import Bottle, BaseRequest, FileUpload, request, response, run

from .pipeline import ThumbnailPipeline
from .upload_config import UploadConfig
from .uploader import UploadRejected, accept_uploads

UPLOAD_FIELD = 'images'

BaseRequest.MEMFILE_MAX = UploadConfig.max_file_size


def log(msg):
    logging.getLogger(__name__).debug(msg)


def handle_upload(
    uploads: List[FileUpload],
    config: UploadConfig,
    pipeline: ThumbnailPipeline
) -> List[dict]:
    """Store uploads and derive thumbnails for each; one detail dict per file."""
    details = []
    for stored in accept_uploads(uploads, config):
        manifest = pipeline.process_image(stored.path, stored.file_name)
        entry = stored.to_dict()
        entry.update(manifest.to_dict())
        details.append(entry)
    return details


def create_app(
    config: UploadConfig,
    pipeline: Optional[ThumbnailPipeline] = None
) -> Bottle:
    """Build the Bottle application around one pipeline."""
    app = Bottle()
    pipeline = pipeline or ThumbnailPipeline(config, max_workers=config.workers)
    logger = logging.getLogger(__name__)

    @app.hook('after_request')
    def log_request():
        logger.info(f"{request.method} {request.path} {response.status_code}")

    @app.route('/')
    def index():
        log("Hit root")
        return 'Hello World!'

    @app.route('/upload', method='POST')
    def upload():
        """Accept up to max_files images in the 'images' field."""
        response.content_type = 'text/plain; charset=utf-8'

        unexpected = [name for name, _ in request.files.allitems() if name != UPLOAD_FIELD]
        if unexpected:
            response.status = 400
            return f"Unexpected field: {unexpected[0]}"

        uploads = request.files.getall(UPLOAD_FIELD)
        if not uploads:
            response.status = 400
            return 'No files were uploaded.'

        try:
            details = handle_upload(uploads, config, pipeline)
        except UploadRejected as e:
            log(f"Upload rejected: {e}")
            response.status = 400
            return str(e)
        except Exception as e:
            logger.exception(f"Upload failed: {e}")
            response.status = 500
            return str(e)

        response.content_type = 'application/json'
        return json.dumps(details)

    return app


def run_server(config: UploadConfig) -> None:
    """Serve the application until interrupted."""
    app = create_app(config)
    logging.getLogger(__name__).info(f"Server is running on port {config.port}")
    run(app=app, host=config.host, port=config.port, quiet=True)
