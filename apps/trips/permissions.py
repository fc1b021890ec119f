"""
Custom permission classes for trip-scoped endpoints.

Access control proper belongs to the trip sharing layer; these classes
only gate who may read or change a trip's expense pool. Views take the
trip from the ``trip_id`` URL kwarg. A missing trip passes the check so
the service layer can answer 404.
"""
from rest_framework.permissions import BasePermission, SAFE_METHODS

from apps.trips.models import Trip


def _get_trip(view):
    trip_id = view.kwargs.get('trip_id')
    if trip_id is None:
        return None
    return Trip.objects.filter(id=trip_id).first()


class CanAccessTripExpenses(BasePermission):
    """
    Read: owner, any collaborator, or holder of an active share token
    (``?token=``). Write: owner or editor collaborator.
    """

    message = 'You do not have access to this trip.'

    def has_permission(self, request, view):
        trip = _get_trip(view)
        if trip is None:
            return True

        if request.method in SAFE_METHODS:
            return trip.can_view(request.user, request.query_params.get('token'))
        return trip.can_edit(request.user)


class IsTripOwnerForWrites(BasePermission):
    """
    Read: same as CanAccessTripExpenses. Write: trip owner only.
    """

    message = 'Only the trip owner can manage members.'

    def has_permission(self, request, view):
        trip = _get_trip(view)
        if trip is None:
            return True

        if request.method in SAFE_METHODS:
            return trip.can_view(request.user, request.query_params.get('token'))
        return trip.is_owner(request.user)
