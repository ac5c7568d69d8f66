"""In‑memory stand‑ins for the e‑mail transport and the image host."""

from typing import List, Optional, Tuple

from routine_api.app.services.asset_service import AssetStorageError, StoredAsset


class FakeEmailTransport:
    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self.fail = False
        self.sent: List[Tuple[str, str, str]] = []

    def send(self, to: str, subject: str, html_body: str) -> bool:
        if self.fail:
            return False
        self.sent.append((to, subject, html_body))
        return True


class FakeAssetStorage:
    """Records uploads and deletions; ``fail_upload_at`` makes the n‑th upload fail."""

    def __init__(self) -> None:
        self.uploaded: List[StoredAsset] = []
        self.deleted: List[str] = []
        self.fail_upload_at: Optional[int] = None
        self.fail_delete = False

    def upload(self, content: bytes, width: int, height: int) -> StoredAsset:
        if self.fail_upload_at is not None and len(self.uploaded) + 1 == self.fail_upload_at:
            raise AssetStorageError("upload failed")
        asset = StoredAsset(
            url=f"https://img.test/{width}x{height}/{len(self.uploaded)}.png",
            public_id=f"user_profiles/{len(self.uploaded)}",
        )
        self.uploaded.append(asset)
        return asset

    def delete(self, public_id: str) -> None:
        if self.fail_delete:
            raise AssetStorageError("delete failed")
        self.deleted.append(public_id)
