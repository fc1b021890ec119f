from rest_framework import viewsets, status
from rest_framework.response import Response

from .serializers import TripMemberSerializer, TripMemberCreateSerializer
from .permissions import IsTripOwnerForWrites

from apps.trips.services import (
    list_members,
    add_member,
    remove_member,
    # Exceptions
    TripNotFoundError,
    MemberNotFoundError,
    InvalidMemberNameError,
    DuplicateLinkedAccountError,
    LinkedAccountNotFoundError,
)


class TripMemberViewSet(viewsets.ViewSet):
    """
    Members of a trip's expense pool.

    list: Get all members in creation order
    create: Add a member (trip owner)
    destroy: Remove a member and everything they paid or owe (trip owner)
    """

    permission_classes = [IsTripOwnerForWrites]

    def list(self, request, trip_id=None):
        try:
            members = list_members(trip_id=trip_id)
        except TripNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        serializer = TripMemberSerializer(members, many=True)
        return Response({'members': serializer.data})

    def create(self, request, trip_id=None):
        serializer = TripMemberCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            member = add_member(
                trip_id=trip_id,
                display_name=serializer.validated_data['display_name'],
                linked_account_id=serializer.validated_data.get('linked_account'),
            )
        except TripNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (InvalidMemberNameError, DuplicateLinkedAccountError, LinkedAccountNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(
            {'member': TripMemberSerializer(member).data},
            status=status.HTTP_201_CREATED
        )

    def destroy(self, request, trip_id=None, pk=None):
        try:
            remove_member(trip_id=trip_id, member_id=pk)
        except (TripNotFoundError, MemberNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(status=status.HTTP_204_NO_CONTENT)
