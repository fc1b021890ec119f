"""
Trips app services layer.

Services contain business logic for the member registry and the
trip-scoped lookups other apps rely on.
"""

from .exceptions import (
    TripsServiceError,
    TripNotFoundError,
    MemberNotFoundError,
    ItemNotFoundError,
    InvalidMemberNameError,
    DuplicateLinkedAccountError,
    LinkedAccountNotFoundError,
)

from .member_management import (
    get_trip_by_id,
    get_trip_member,
    get_trip_item,
    list_members,
    add_member,
    remove_member,
)


__all__ = [
    # Exceptions
    'TripsServiceError',
    'TripNotFoundError',
    'MemberNotFoundError',
    'ItemNotFoundError',
    'InvalidMemberNameError',
    'DuplicateLinkedAccountError',
    'LinkedAccountNotFoundError',

    # Lookups
    'get_trip_by_id',
    'get_trip_member',
    'get_trip_item',

    # Member Registry
    'list_members',
    'add_member',
    'remove_member',
]
