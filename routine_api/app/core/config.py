"""
Configuration management.

The ``Settings`` dataclass holds every tunable of the application:
token secrets, the database location, the ownership strategies of the
data model and the credentials of the external collaborators (asset
storage and e‑mail).  ``Settings.from_env`` reads the values from
environment variables once at startup; the resulting object is handed
explicitly to ``create_app`` and from there to every service and
client that needs it.  Nothing else in the code base reads the
environment.
"""

import os
from dataclasses import dataclass


TAG_STORAGE_EMBEDDED = "embedded"
TAG_STORAGE_COLLECTION = "collection"

IDENTITY_SNAPSHOT = "snapshot"
IDENTITY_REFERENCE = "reference"


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings."""

    project_name: str = "Daily Routine API"
    api_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"
    log_file: str = ""

    secret_key: str = "change_me"
    access_token_expire_minutes: int = 60 * 24
    verification_token_expire_minutes: int = 60 * 24
    algorithm: str = "HS256"

    # Path of the SQLite file backing the document store.  Relative paths
    # are resolved against the project root by ``core.db``.
    database_url: str = "routine.db"

    # Where a user's tags live: ``embedded`` keeps them as an array on the
    # user document, ``collection`` keeps them in a separate collection
    # keyed by the owner's id.
    tag_storage: str = TAG_STORAGE_EMBEDDED

    # ``snapshot`` serves the owner/assignee copies stored on a task as
    # they were written; ``reference`` re-resolves them from the live user
    # documents on every read.
    identity_mode: str = IDENTITY_SNAPSHOT

    cloudinary_cloud_name: str = ""
    cloudinary_api_key: str = ""
    cloudinary_api_secret: str = ""
    cloudinary_folder: str = "user_profiles"

    mail_api_key: str = ""
    mail_api_url: str = "https://api.resend.com/emails"
    sender_email: str = "no-reply@example.com"
    sender_name: str = "Daily Routine"

    # Base URL of the web client, used to build verification links.
    app_url: str = "http://localhost:3000"

    http_timeout: float = 15.0

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables, falling back to defaults."""
        defaults = cls()
        return cls(
            project_name=os.getenv("PROJECT_NAME", defaults.project_name),
            api_version=os.getenv("API_VERSION", defaults.api_version),
            debug=_env_bool("DEBUG"),
            log_level=os.getenv("LOG_LEVEL", defaults.log_level),
            log_file=os.getenv("LOG_FILE", defaults.log_file),
            secret_key=os.getenv("SECRET_KEY", defaults.secret_key),
            access_token_expire_minutes=int(
                os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(defaults.access_token_expire_minutes))
            ),
            verification_token_expire_minutes=int(
                os.getenv(
                    "VERIFICATION_TOKEN_EXPIRE_MINUTES",
                    str(defaults.verification_token_expire_minutes),
                )
            ),
            algorithm=os.getenv("ALGORITHM", defaults.algorithm),
            database_url=os.getenv("DATABASE_URL", defaults.database_url),
            tag_storage=os.getenv("TAG_STORAGE", defaults.tag_storage),
            identity_mode=os.getenv("IDENTITY_MODE", defaults.identity_mode),
            cloudinary_cloud_name=os.getenv("CLOUDINARY_CLOUD_NAME", ""),
            cloudinary_api_key=os.getenv("CLOUDINARY_API_KEY", ""),
            cloudinary_api_secret=os.getenv("CLOUDINARY_API_SECRET", ""),
            cloudinary_folder=os.getenv("CLOUDINARY_FOLDER", defaults.cloudinary_folder),
            mail_api_key=os.getenv("MAIL_API_KEY", ""),
            mail_api_url=os.getenv("MAIL_API_URL", defaults.mail_api_url),
            sender_email=os.getenv("SENDER_EMAIL", defaults.sender_email),
            sender_name=os.getenv("SENDER_NAME", defaults.sender_name),
            app_url=os.getenv("APP_URL", defaults.app_url),
            http_timeout=float(os.getenv("HTTP_TIMEOUT", str(defaults.http_timeout))),
        )

    def validate(self) -> None:
        """Reject unknown values for the strategy switches."""
        if self.tag_storage not in {TAG_STORAGE_EMBEDDED, TAG_STORAGE_COLLECTION}:
            raise ValueError(f"Unknown tag storage strategy: {self.tag_storage!r}")
        if self.identity_mode not in {IDENTITY_SNAPSHOT, IDENTITY_REFERENCE}:
            raise ValueError(f"Unknown identity mode: {self.identity_mode!r}")
