"""Matching engine exceptions."""


class MatchingError(Exception):
    """Base exception for matching engine errors."""

    pass


class NotFoundError(MatchingError):
    """Raised when a requester id does not resolve to a profile."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User not found: {user_id}")
