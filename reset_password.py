#!/usr/bin/env python3
"""
Reset a user's password in the Wedding Planner SQLite database.

This script DOES NOT read or reveal any existing passwords. It simply sets a new password
hash (PBKDF2-HMAC-SHA256, format "salthex$hashhex") for the specified user email.

Usage:
    python reset_password.py --db ./wedding_planner_api/wedding_planner.db --email bride@ex.com --password "NewStrongPass!234"

If --password is omitted, you will be prompted to enter it securely.  Without --db the
DATABASE_URL setting is used.
"""

import argparse
import getpass
import os
import sys

from wedding_planner_api.app.core.config import settings
from wedding_planner_api.app.core.db import get_database_path
from wedding_planner_api.app.services.user_service import UserService


def main():
    ap = argparse.ArgumentParser(description="Reset Wedding Planner user password (SQLite).")
    ap.add_argument("--db", help="Path to SQLite DB file (defaults to DATABASE_URL)")
    ap.add_argument("--email", required=True, help="User email to update")
    ap.add_argument("--password", help="New password. If omitted, you'll be prompted securely.")
    args = ap.parse_args()

    if args.db:
        settings.database_url = os.path.abspath(args.db)
    if not os.path.exists(get_database_path()):
        print(f"[!] DB not found: {get_database_path()}", file=sys.stderr)
        sys.exit(1)

    new_password = args.password or getpass.getpass("Enter NEW password: ")
    if len(new_password) < 6:
        print("[!] Password must be at least 6 characters.", file=sys.stderr)
        sys.exit(1)

    if not UserService.set_password(args.email, new_password):
        print(f"[!] No user found with email: {args.email}", file=sys.stderr)
        sys.exit(2)
    print(f"[+] Password updated for user: {args.email}")


if __name__ == "__main__":
    main()
