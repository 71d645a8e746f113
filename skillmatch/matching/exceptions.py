"""Match lifecycle exceptions.

All match errors inherit from MatchError for easy catching.
"""

from typing import Optional

from skillmatch.domain.models import Match

DUPLICATE_MATCH_MESSAGE = "you already have a pending or active match with this person"


class MatchError(Exception):
    """Base exception for match lifecycle errors."""

    pass


class SelfMatchError(MatchError):
    """Raised when a user proposes a match with themself."""

    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"Cannot match with yourself (user {user_id})")


class DuplicateMatchError(MatchError):
    """Raised when the pair already has a pending or accepted match.

    Attributes:
        existing: The blocking match, when it could be read back
    """

    def __init__(self, message: str = DUPLICATE_MATCH_MESSAGE, existing: Optional[Match] = None):
        self.existing = existing
        super().__init__(message)


class MatchNotFoundError(MatchError):
    """Raised when a match id does not exist."""

    def __init__(self, match_id: int):
        self.match_id = match_id
        super().__init__(f"Match {match_id} not found")


class InvalidStateTransition(MatchError):
    """Raised when responding to a match that is no longer pending."""

    def __init__(self, match_id: int, current_status: str):
        self.match_id = match_id
        self.current_status = current_status
        super().__init__(f"Match {match_id} is {current_status}, only pending matches can be answered")


class UnauthorizedTransition(MatchError):
    """Raised when someone other than the recipient responds to a match."""

    def __init__(self, match_id: int, user_id: int):
        self.match_id = match_id
        self.user_id = user_id
        super().__init__(f"User {user_id} is not the recipient of match {match_id}")
