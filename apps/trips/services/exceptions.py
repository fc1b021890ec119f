"""
Domain-specific exceptions for trips app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class TripsServiceError(Exception):
    """Base exception for all trips service errors."""
    pass


class TripNotFoundError(TripsServiceError):
    """Raised when a trip does not exist."""
    pass


class MemberNotFoundError(TripsServiceError):
    """Raised when a member does not exist in the given trip."""
    pass


class ItemNotFoundError(TripsServiceError):
    """Raised when an itinerary item does not exist in the given trip."""
    pass


class InvalidMemberNameError(TripsServiceError):
    """Raised when a member name is empty or too long."""
    pass


class DuplicateLinkedAccountError(TripsServiceError):
    """Raised when an account is already linked to a member of the trip."""
    pass


class LinkedAccountNotFoundError(TripsServiceError):
    """Raised when the account to link a member to does not exist."""
    pass
