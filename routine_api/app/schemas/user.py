"""
Pydantic models for user data.

``UserPublic`` is the only shape in which another user's data leaves
the API: it never carries the password hash, tags, contact list or
verification state.  ``UserSnapshot`` is the copy of those public
fields that tasks and events store by value.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_AVATAR_URL = (
    "https://res.cloudinary.com/dcpbu1ffy/image/upload/v1664309906/f/images/profile/profile_ob28l3.webp"
)

# Rendered avatar sizes, keyed by edge length in pixels.
AVATAR_SIZES = (64, 200)


class AvatarImage(BaseModel):
    url: str = DEFAULT_AVATAR_URL
    public_id: Optional[str] = None


def default_avatar() -> Dict[str, Dict[str, Any]]:
    return {str(size): AvatarImage().model_dump() for size in AVATAR_SIZES}


class UserPublic(BaseModel):
    """Public‑safe view of a user."""

    id: str
    name: str
    email: str
    avatar: Dict[str, AvatarImage] = Field(default_factory=lambda: {
        str(size): AvatarImage() for size in AVATAR_SIZES
    })

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "UserPublic":
        return cls(
            id=doc["id"],
            name=doc["name"],
            email=doc["email"],
            avatar=doc.get("avatar") or default_avatar(),
        )


class UserSnapshot(UserPublic):
    """Identity copied by value onto a task or event.

    A snapshot reflects the user at the moment it was taken.  Later
    profile changes (name, e‑mail, avatar) are not propagated to
    documents that already hold a snapshot; that staleness is the price
    paid for listing tasks without looking users up.  The snapshot is
    not a foreign key: only ``id`` may be used to find the live user.
    """


class UserProfile(UserPublic):
    """The authenticated user's own profile."""

    verified: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "UserProfile":
        return cls(
            id=doc["id"],
            name=doc["name"],
            email=doc["email"],
            avatar=doc.get("avatar") or default_avatar(),
            verified=bool(doc.get("verified")),
            created_at=doc.get("created_at"),
            updated_at=doc.get("updated_at"),
        )


class UserRegister(BaseModel):
    name: str = Field(..., examples=["Jane Doe"])
    email: str = Field(..., examples=["jane@example.com"])
    password: str = Field(..., examples=["strongpassword"])


class UserLogin(BaseModel):
    email: str = Field(..., examples=["jane@example.com"])
    password: str = Field(..., examples=["strongpassword"])


class ProfileUpdate(BaseModel):
    """Partial profile update; omitted or empty fields keep their value."""

    name: Optional[str] = None
    email: Optional[str] = None


class PasswordUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    old_password: str = Field("", alias="oldPassword")
    new_password: str = Field("", alias="newPassword")


class ContactAdd(BaseModel):
    id: str = Field(..., description="Id of the user to add to the contact list")


class LoginResponse(BaseModel):
    status: str = "success"
    message: str = "User logged in successfully!"
    user: UserProfile
    token: str


class MessageResponse(BaseModel):
    message: str
