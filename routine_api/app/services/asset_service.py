"""
Image hosting client.

``CloudinaryStorage`` uploads image buffers through Cloudinary's signed
upload API, asking the provider to crop them to the requested size,
and deletes them again by ``public_id``.  All failures surface as
``AssetStorageError`` so that callers can clean up staged uploads.
"""

import hashlib
import logging
import time
from dataclasses import dataclass
from typing import Dict, Optional

import requests

from ..core.config import Settings

logger = logging.getLogger(__name__)

API_BASE = "https://api.cloudinary.com/v1_1"


class AssetStorageError(Exception):
    """Raised when an upload or deletion fails."""


@dataclass
class StoredAsset:
    url: str
    public_id: str


class CloudinaryStorage:
    """Upload and delete images in a Cloudinary account."""

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None) -> None:
        self.settings = settings
        self.session = session or requests.Session()

    @property
    def configured(self) -> bool:
        s = self.settings
        return bool(s.cloudinary_cloud_name and s.cloudinary_api_key and s.cloudinary_api_secret)

    def _signed(self, params: Dict[str, str]) -> Dict[str, str]:
        """Add ``timestamp``, ``api_key`` and the SHA‑1 request signature."""
        params = dict(params, timestamp=str(int(time.time())))
        to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
        signature = hashlib.sha1((to_sign + self.settings.cloudinary_api_secret).encode("utf-8")).hexdigest()
        return dict(params, api_key=self.settings.cloudinary_api_key, signature=signature)

    def _post(self, action: str, data: Dict[str, str], files: Optional[dict] = None) -> dict:
        if not self.configured:
            raise AssetStorageError("Asset storage is not configured")
        url = f"{API_BASE}/{self.settings.cloudinary_cloud_name}/image/{action}"
        try:
            response = self.session.post(url, data=data, files=files, timeout=self.settings.http_timeout)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as exc:
            raise AssetStorageError(f"Cloudinary {action} failed: {exc}") from exc

    def upload(self, content: bytes, width: int, height: int) -> StoredAsset:
        data = self._signed(
            {
                "folder": self.settings.cloudinary_folder,
                "transformation": f"c_fill,h_{height},w_{width}",
            }
        )
        result = self._post("upload", data, files={"file": ("avatar", content)})
        try:
            return StoredAsset(url=result["secure_url"], public_id=result["public_id"])
        except KeyError as exc:
            raise AssetStorageError(f"Unexpected upload response: missing {exc}") from exc

    def delete(self, public_id: str) -> None:
        self._post("destroy", self._signed({"public_id": public_id}))
        logger.info("Deleted image %s", public_id)
