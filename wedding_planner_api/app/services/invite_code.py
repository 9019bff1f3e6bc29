"""
Invite code generation.

Codes are eight characters drawn from ``A-Z0-9`` (about 41 bits).  A
candidate is checked against the store and redrawn on collision, up to
a fixed number of attempts.
"""

import logging
import secrets
import string
from typing import Callable, Optional

from ..core.config import settings
from ..core.errors import CodeSpaceExhaustedError

INVITE_CODE_ALPHABET = string.ascii_uppercase + string.digits
INVITE_CODE_LENGTH = 8

logger = logging.getLogger(__name__)


def normalize_invite_code(code: str) -> str:
    return code.strip().upper()


def is_valid_invite_code(code: str) -> bool:
    return len(code) == INVITE_CODE_LENGTH and all(ch in INVITE_CODE_ALPHABET for ch in code)


class InviteCodeGenerator:
    """Draws invite codes that are not yet taken.

    Parameters
    ----------
    is_taken : Callable[[str], bool]
        Uniqueness check against the store.
    max_attempts : Optional[int]
        Draws before giving up with ``CodeSpaceExhaustedError``.
        Defaults to ``settings.invite_code_max_attempts``.
    choice : Optional[Callable[[str], str]]
        Picks one character from the alphabet; ``secrets.choice`` unless
        a test supplies a deterministic source.
    """

    def __init__(
        self,
        is_taken: Callable[[str], bool],
        max_attempts: Optional[int] = None,
        choice: Optional[Callable[[str], str]] = None,
    ) -> None:
        self.is_taken = is_taken
        self.max_attempts = max(1, max_attempts or settings.invite_code_max_attempts)
        self.choice = choice or secrets.choice

    def draw(self) -> str:
        return "".join(self.choice(INVITE_CODE_ALPHABET) for _ in range(INVITE_CODE_LENGTH))

    def generate(self) -> str:
        for attempt in range(1, self.max_attempts + 1):
            candidate = self.draw()
            if not self.is_taken(candidate):
                return candidate
            logger.debug("Invite code collision on attempt %d", attempt)
        logger.error("No free invite code after %d attempts", self.max_attempts)
        raise CodeSpaceExhaustedError()
