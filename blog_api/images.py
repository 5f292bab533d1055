"""
Image host integration for django-blog-api.

Images are stored on Cloudinary. PostService only depends on an object with
an ``upload(fileobj, filename)`` method returning an ImageRef, so any other
host (or a test double) can be swapped in.
"""
import logging
from dataclasses import dataclass

import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from .conf import blog_settings
from .exceptions import ImageUploadFailed

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageRef:
    url: str
    public_id: str = ""


class CloudinaryImageHost:
    """Upload images to a Cloudinary account."""

    def __init__(self, cloud_name, api_key, api_secret, folder="blog"):
        self.folder = folder
        self._config = {
            "cloud_name": cloud_name,
            "api_key": api_key,
            "api_secret": api_secret,
            "secure": True,
        }

    @classmethod
    def from_settings(cls):
        host = blog_settings.IMAGE_HOST
        return cls(
            cloud_name=host["cloud_name"],
            api_key=host["api_key"],
            api_secret=host["api_secret"],
            folder=blog_settings.IMAGE_FOLDER,
        )

    def upload(self, fileobj, filename=None):
        """
        Upload ``fileobj`` and return its hosted reference.

        Raises:
            ImageUploadFailed: the SDK or the network failed, or the host
                returned no URL.
        """
        try:
            result = cloudinary.uploader.upload(
                fileobj,
                resource_type="image",
                folder=self.folder,
                overwrite=False,
                **self._config,
            )
        except (CloudinaryError, OSError) as exc:
            logger.exception("Cloudinary upload of %s failed", filename or "<stream>")
            raise ImageUploadFailed() from exc

        url = result.get("secure_url") or result.get("url")
        if not url:
            logger.error("Cloudinary returned no URL for %s", filename or "<stream>")
            raise ImageUploadFailed()
        return ImageRef(url=url, public_id=result.get("public_id", ""))
