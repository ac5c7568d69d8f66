#!/usr/bin/env python3
"""
Reset a user's password in the Daily Routine document store.

The script never reads or reveals the current password; it stores a
fresh PBKDF2 hash for the account with the given e‑mail.

Usage:
    python -m routine_api.reset_password --db ./routine.db --email jane@example.com --password "NewStrongPass!234"

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import getpass
import os
import sys

from routine_api.app.core.db import DocumentStore
from routine_api.app.core.security import hash_password
from routine_api.app.utils.validators import MIN_PASSWORD_LENGTH, normalize_email


def reset_password(store: DocumentStore, email: str, new_password: str) -> bool:
    """Store a new hash for ``email``; ``False`` when no such user exists."""
    user = store.find_one("users", "json_extract(body, '$.email') = ?", (normalize_email(email),))
    if not user:
        return False
    user["password"] = hash_password(new_password)
    store.replace("users", user)
    return True


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Reset a Daily Routine user's password.")
    ap.add_argument("--db", required=True, help="Path to the SQLite file (e.g. ./routine.db)")
    ap.add_argument("--email", required=True, help="E‑mail of the account to update")
    ap.add_argument("--password", help="New password. If omitted, you'll be prompted securely.")
    args = ap.parse_args(argv)

    if not os.path.exists(args.db):
        print(f"[!] DB not found: {args.db}", file=sys.stderr)
        return 1

    new_password = args.password or getpass.getpass("Enter NEW password: ")
    if len(new_password) < MIN_PASSWORD_LENGTH:
        print(f"[!] Password must be at least {MIN_PASSWORD_LENGTH} characters.", file=sys.stderr)
        return 1

    if not reset_password(DocumentStore(os.path.abspath(args.db)), args.email, new_password):
        print(f"[!] No user found with email: {args.email}", file=sys.stderr)
        return 2
    print(f"[+] Password updated for user: {args.email}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
