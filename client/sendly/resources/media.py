"""Media resource: uploads MMS attachments"""

import logging
import os
from typing import Optional

from ..exceptions import ValidationError
from ..models import MediaFile
from .base import Resource

logger = logging.getLogger(__name__)


class Media(Resource):

    def upload(self, file_path: str, content_type: Optional[str] = None) -> MediaFile:
        """Upload a file to attach to MMS messages.

        Args:
            file_path: Path to the file to upload
            content_type: MIME type (detected by the API if None)
        """
        if not os.path.isfile(file_path):
            raise ValidationError(f"File not found: {file_path}")

        if not os.access(file_path, os.R_OK):
            raise ValidationError(f"File is not readable: {file_path}")

        filename = os.path.basename(file_path)
        # read up front so a retried attempt resends the whole file
        with open(file_path, 'rb') as f:
            content = f.read()

        if content_type is not None:
            files = {'file': (filename, content, content_type)}
        else:
            files = {'file': (filename, content)}
        response = self._client.post_multipart('/media', files)

        media = MediaFile.from_dict(self._unwrap(response, 'media', 'data'))
        logger.info(f"Uploaded {filename} as media {media.id} ({media.size_bytes} bytes)")
        return media
