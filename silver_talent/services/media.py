# silver_talent/services/media.py
import io
import logging
from dataclasses import dataclass
from typing import Dict, Optional

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from fastapi import UploadFile

from silver_talent.config import Config

logger = logging.getLogger(__name__)


class MediaStoreError(Exception):
    pass


@dataclass
class UploadedFile:
    """A multipart file read into memory, so services can run off the event loop"""
    filename: str
    content_type: Optional[str]
    content: bytes


async def read_upload(upload: Optional[UploadFile]) -> Optional[UploadedFile]:
    if upload is None:
        return None
    return UploadedFile(filename=upload.filename or "", content_type=upload.content_type,
                        content=await upload.read())


class MediaStore:
    """
    Cloudinary-backed object store. Uploads return {"public_id", "url"};
    nothing here is transactional with the database.
    """

    def __init__(self, cloud_name: str, api_key: str, api_secret: str):
        cloudinary.config(cloud_name=cloud_name, api_key=api_key, api_secret=api_secret, secure=True)
        self.cloud_name = cloud_name

    @classmethod
    def from_config(cls) -> "MediaStore":
        missing = Config.missing_media_credentials()
        if missing:
            raise RuntimeError(f"Media store credentials are not configured: {', '.join(missing)}")
        return cls(Config.CLOUDINARY_CLOUD_NAME, Config.CLOUDINARY_API_KEY, Config.CLOUDINARY_API_SECRET)

    def upload(self, content: bytes, filename: str, folder: str, resource_type: str = "auto") -> Dict[str, str]:
        stream = io.BytesIO(content)
        stream.name = filename
        try:
            result = cloudinary.uploader.upload(stream, folder=folder, resource_type=resource_type)
        except (CloudinaryError, OSError) as e:
            raise MediaStoreError(f"Upload failed: {e}") from e

        logger.info(f"Uploaded {filename} to {folder} as {result.get('public_id')}")
        return {"public_id": result["public_id"], "url": result.get("secure_url") or result.get("url")}

    def delete(self, public_id: str, resource_type: str = "image") -> Dict:
        if not public_id:
            return {"result": "ok"}
        try:
            result = cloudinary.uploader.destroy(public_id, resource_type=resource_type)
        except (CloudinaryError, OSError) as e:
            raise MediaStoreError(f"Delete failed for {public_id}: {e}") from e

        # 'not found' means it is already gone
        if result.get("result") not in ("ok", "not found"):
            logger.warning(f"Media deletion warning for {public_id}: {result.get('result')}")
        return result


def delete_quietly(media_store, media: Optional[Dict], context: str = "") -> bool:
    """Best-effort delete of a stored media reference; failures are only logged"""
    public_id = (media or {}).get("public_id")
    if not public_id:
        return False
    try:
        media_store.delete(public_id)
        return True
    except Exception as e:
        logger.warning(f"Error deleting media {public_id} {context}(non-blocking): {e}")
        return False
