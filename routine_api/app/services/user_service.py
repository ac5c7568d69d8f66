"""
Business logic for users.

``UserService`` covers the user directory: registration and login,
account verification, profile and password changes, the profile
picture, the "sleipner" contact list and user search.  It also hands
out ``UserSnapshot`` copies to the task and event services.

Contacts are stored one‑directionally: adding B to A's list touches
only A's document.
"""

import logging
import os
from typing import Any, Dict, List, Optional, Sequence

from ..core.config import Settings
from ..core.db import DocumentStore, new_id
from ..core.errors import AuthError, ConflictError, NotFoundError, ValidationError, service_errors
from ..core.security import (
    VERIFY_PURPOSE,
    create_access_token,
    create_verification_token,
    decode_token,
    hash_password,
    verify_password,
)
from ..schemas.user import (
    AVATAR_SIZES,
    LoginResponse,
    MessageResponse,
    PasswordUpdate,
    ProfileUpdate,
    UserProfile,
    UserPublic,
    UserRegister,
    UserSnapshot,
    default_avatar,
)
from ..utils.user_agent import parse_device
from ..utils.validators import MIN_PASSWORD_LENGTH, is_valid_email, normalize_email
from .activity_service import ActivityService, bold, page_bounds, plain
from .asset_service import AssetStorageError, CloudinaryStorage
from .email_service import EmailTransport, render_verification_email

logger = logging.getLogger(__name__)

ALLOWED_PICTURE_EXTENSIONS = {".jpg", ".jpeg", ".png"}

USER_NOT_FOUND = "User not found. Please check the provided ID or register for a new account."


class UserService:
    """User directory operations."""

    def __init__(
        self,
        store: DocumentStore,
        settings: Settings,
        activities: ActivityService,
        mailer: EmailTransport,
        assets: CloudinaryStorage,
    ) -> None:
        self.store = store
        self.settings = settings
        self.activities = activities
        self.mailer = mailer
        self.assets = assets

    # ------------------------------------------------------------------
    # Lookups shared with other services
    # ------------------------------------------------------------------
    def require_user(self, user_id: str) -> Dict[str, Any]:
        user = self.store.get("users", user_id)
        if not user:
            raise NotFoundError(USER_NOT_FOUND)
        return user

    def find_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        return self.store.find_one("users", "json_extract(body, '$.email') = ?", (normalize_email(email),))

    def snapshots_by_id(self, user_ids: Sequence[str]) -> Dict[str, Dict[str, Any]]:
        """Fetch snapshots for many users in one query; unknown ids are absent."""
        unique = list(dict.fromkeys(user_ids))
        if not unique:
            return {}
        placeholders = ", ".join("?" for _ in unique)
        docs = self.store.find("users", f"id IN ({placeholders})", unique)
        return {doc["id"]: UserSnapshot.from_document(doc).model_dump() for doc in docs}

    def snapshots(self, user_ids: Sequence[str]) -> List[Dict[str, Any]]:
        """Snapshots in request order; every id must resolve."""
        found = self.snapshots_by_id(user_ids)
        missing = [user_id for user_id in user_ids if user_id not in found]
        if missing:
            raise NotFoundError(f"User(s) not found: {', '.join(dict.fromkeys(missing))}")
        return [dict(found[user_id]) for user_id in user_ids]

    # ------------------------------------------------------------------
    # Registration, login and verification
    # ------------------------------------------------------------------
    @service_errors
    async def register(self, data: UserRegister) -> UserProfile:
        """Create an account; the password is stored only as a salted hash."""
        name = (data.name or "").strip()
        email = normalize_email(data.email or "")
        if not name:
            raise ValidationError("Name is required")
        if not is_valid_email(email):
            raise ValidationError("Invalid email format")
        if len(data.password or "") < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
        if self.find_by_email(email):
            raise ValidationError("This email is already registered")

        nonce = new_id()
        user = self.store.insert(
            "users",
            {
                "name": name,
                "email": email,
                "password": hash_password(data.password),
                "verified": False,
                "verification_nonce": nonce,
                "avatar": default_avatar(),
                "tags": [],
                "sleipner": [],
            },
        )
        logger.info("Registered user %s", user["id"])
        self._send_verification(user, nonce)
        return UserProfile.from_document(user)

    def _send_verification(self, user: Dict[str, Any], nonce: str) -> None:
        if not self.mailer.enabled:
            return
        token = create_verification_token(user["id"], nonce, self.settings)
        link = f"{self.settings.app_url.rstrip('/')}/verify/{token}"
        if not self.mailer.send(user["email"], "Verify your account", render_verification_email(user["name"], link)):
            logger.warning("Verification e‑mail for user %s was not delivered", user["id"])

    @service_errors
    async def login(self, email: str, password: str, user_agent: Optional[str] = None) -> LoginResponse:
        """Check credentials, issue a token and record a login activity."""
        user = self.find_by_email(email or "")
        if not user or not verify_password(password or "", user.get("password", "")):
            raise AuthError("Invalid email or password")
        token = create_access_token(user["id"], self.settings)

        device = parse_device(user_agent)
        await self.activities.append(
            user["id"],
            "login",
            "Login Your Account",
            [
                bold(device.os_label),
                plain("or"),
                bold(device.browser_label),
                plain("login your account"),
            ],
        )
        return LoginResponse(user=UserProfile.from_document(user), token=token)

    @service_errors
    async def verify_account(self, token: str) -> MessageResponse:
        """Mark the account verified; each link works once."""
        payload = decode_token(token, self.settings)
        if not payload or payload.get("purpose") != VERIFY_PURPOSE:
            raise AuthError("Invalid or expired verification link")
        user = self.store.get("users", payload.get("sub"))
        if not user or not user.get("verification_nonce") or user["verification_nonce"] != payload.get("nonce"):
            raise AuthError("Invalid or expired verification link")
        user["verified"] = True
        user["verification_nonce"] = None
        self.store.replace("users", user)
        return MessageResponse(message="Account verified successfully")

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------
    @service_errors
    async def get_profile(self, user_id: str) -> UserProfile:
        return UserProfile.from_document(self.require_user(user_id))

    @service_errors
    async def update_profile(self, user_id: str, data: ProfileUpdate) -> UserProfile:
        """Merge the provided fields; empty values keep the stored ones."""
        user = self.require_user(user_id)
        if data.email:
            email = normalize_email(data.email)
            if not is_valid_email(email):
                raise ValidationError("Invalid email format")
            owner = self.find_by_email(email)
            if owner and owner["id"] != user_id:
                raise ConflictError("This email is already registered")
            user["email"] = email
        if data.name and data.name.strip():
            user["name"] = data.name.strip()
        saved = self.store.replace("users", user)
        return UserProfile.from_document(saved)

    @service_errors
    async def update_password(self, user_id: str, data: PasswordUpdate) -> MessageResponse:
        user = self.require_user(user_id)
        if not data.old_password or len(data.new_password or "") < MIN_PASSWORD_LENGTH:
            raise AuthError("Invalid credentials. Please check your credentials and try again.")
        if not verify_password(data.old_password, user.get("password", "")):
            raise AuthError("Invalid password. Please check your credentials and try again.")
        user["password"] = hash_password(data.new_password)
        self.store.replace("users", user)
        return MessageResponse(message="Password updated successfully")

    @service_errors
    async def update_avatar(self, user_id: str, content: bytes, filename: str) -> UserProfile:
        """Replace the profile picture in two phases.

        Both renditions are uploaded first.  Only after the user document
        has been saved with the new references are the previous images
        released; if an upload or the save fails, the images uploaded so
        far are released instead and the old ones stay untouched.
        """
        extension = os.path.splitext(filename or "")[1].lower()
        if extension not in ALLOWED_PICTURE_EXTENSIONS:
            raise ValidationError("Invalid file type. Only .jpg, .jpeg and .png images are allowed.")
        if not content:
            raise ValidationError("Profile picture is required")

        user = self.require_user(user_id)
        previous = user.get("avatar") or default_avatar()
        staged = []
        try:
            for size in AVATAR_SIZES:
                staged.append((size, self.assets.upload(content, size, size)))
            user["avatar"] = {
                str(size): {"url": asset.url, "public_id": asset.public_id} for size, asset in staged
            }
            saved = self.store.replace("users", user)
            if saved is None:
                raise NotFoundError(USER_NOT_FOUND)
        except Exception:
            for _, asset in staged:
                self._release_asset(asset.public_id)
            raise

        for image in previous.values():
            if image.get("public_id"):
                self._release_asset(image["public_id"])
        return UserProfile.from_document(saved)

    def _release_asset(self, public_id: str) -> None:
        try:
            self.assets.delete(public_id)
        except AssetStorageError as exc:
            logger.warning("Could not delete image %s: %s", public_id, exc)

    # ------------------------------------------------------------------
    # Contacts ("sleipner")
    # ------------------------------------------------------------------
    @service_errors
    async def add_contact(self, user_id: str, contact_id: str) -> UserProfile:
        """Add a contact if absent; adding twice leaves one entry."""
        if contact_id == user_id:
            raise ValidationError("You cannot add yourself as a sleipner")
        if not self.store.get("users", contact_id):
            raise NotFoundError("Sleipner not found. Please check the provided ID")
        user = self.require_user(user_id)
        contacts = list(user.get("sleipner") or [])
        if contact_id not in contacts:
            contacts.append(contact_id)
            user["sleipner"] = contacts
            user = self.store.replace("users", user)
        return UserProfile.from_document(user)

    @service_errors
    async def remove_contact(self, user_id: str, contact_id: str) -> MessageResponse:
        user = self.require_user(user_id)
        contacts = list(user.get("sleipner") or [])
        if contact_id in contacts:
            user["sleipner"] = [c for c in contacts if c != contact_id]
            self.store.replace("users", user)
        return MessageResponse(message="Delete Successfully")

    @service_errors
    async def list_contacts(self, user_id: str, page: int = 1, per_page: int = 10) -> List[UserSnapshot]:
        limit, offset = page_bounds(page, per_page)
        contact_ids = list(self.require_user(user_id).get("sleipner") or [])[offset:offset + limit]
        found = self.snapshots_by_id(contact_ids)
        return [UserSnapshot(**found[cid]) for cid in contact_ids if cid in found]

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    @service_errors
    async def search(self, query: str, page: int = 1, per_page: int = 10) -> List[UserPublic]:
        """Case‑insensitive substring match on name or e‑mail."""
        limit, offset = page_bounds(page, per_page)
        escaped = (query or "").lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        pattern = f"%{escaped}%"
        docs = self.store.find(
            "users",
            "lower(json_extract(body, '$.name')) LIKE ? ESCAPE '\\' "
            "OR lower(json_extract(body, '$.email')) LIKE ? ESCAPE '\\'",
            (pattern, pattern),
            limit=limit,
            offset=offset,
        )
        return [UserPublic.from_document(doc) for doc in docs]
