from rest_framework import serializers
from .models import TripMember, MEMBER_NAME_MAX_LENGTH


class TripMemberSerializer(serializers.ModelSerializer):
    """Member of a trip's expense pool."""

    class Meta:
        model = TripMember
        fields = ['id', 'trip', 'display_name', 'linked_account', 'created_at']
        read_only_fields = fields


class TripMemberCreateSerializer(serializers.Serializer):
    """Validate input for adding a member."""

    display_name = serializers.CharField(max_length=MEMBER_NAME_MAX_LENGTH, trim_whitespace=True)
    linked_account = serializers.UUIDField(required=False, allow_null=True)
