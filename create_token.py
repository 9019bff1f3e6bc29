"""Mint an access token for an existing user id.

Usage:
    python create_token.py <user_id> [days]
"""
import sys

from wedding_planner_api.app.core.security import create_access_token

if len(sys.argv) < 2:
    print("usage: python create_token.py <user_id> [days]", file=sys.stderr)
    sys.exit(1)

# lifetime in seconds, 365 days unless given
days = int(sys.argv[2]) if len(sys.argv) > 2 else 365
token = create_access_token({"sub": sys.argv[1]}, expires_delta=days * 24 * 60 * 60)
print(token)
