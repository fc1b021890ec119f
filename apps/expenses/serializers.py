from rest_framework import serializers
from .models import Expense, ExpenseSplit, ShareType


# =============================================================================
# Input Serializers
# =============================================================================

class SplitInputSerializer(serializers.Serializer):
    """
    One apportionment rule.

    Fields:
        member_id (UUID): Trip member the rule applies to
        share_type (str): equal, percentage or amount
        share_value (int): Percentage (0-100) or fixed amount in minor units
    """

    member_id = serializers.UUIDField()
    share_type = serializers.ChoiceField(choices=ShareType.choices, default=ShareType.EQUAL)
    share_value = serializers.IntegerField(min_value=0, required=False, allow_null=True)

    def validate(self, attrs):
        share_type = attrs.get('share_type', ShareType.EQUAL)
        share_value = attrs.get('share_value')

        if share_type != ShareType.EQUAL and share_value is None:
            raise serializers.ValidationError({
                'share_value': f'Required for {share_type} splits'
            })

        if share_type == ShareType.PERCENTAGE and share_value > 100:
            raise serializers.ValidationError({
                'share_value': 'Percentage must be between 0 and 100'
            })

        return attrs


def _validate_unique_members(splits):
    member_ids = [split['member_id'] for split in splits]
    if len(member_ids) != len(set(member_ids)):
        raise serializers.ValidationError('Each member may appear only once in splits')
    return splits


class ExpenseCreateSerializer(serializers.Serializer):
    """Validate input for recording a standalone expense."""

    payer_id = serializers.UUIDField()
    amount = serializers.IntegerField(min_value=1)
    description = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')
    item_id = serializers.UUIDField(required=False, allow_null=True)
    splits = SplitInputSerializer(many=True, required=False, default=list)

    def validate_splits(self, value):
        return _validate_unique_members(value)


class ExpenseUpdateSerializer(serializers.Serializer):
    """Validate input for updating an expense. Every field is optional."""

    payer_id = serializers.UUIDField(required=False)
    amount = serializers.IntegerField(min_value=1, required=False)
    description = serializers.CharField(max_length=500, required=False, allow_blank=True)
    item_id = serializers.UUIDField(required=False, allow_null=True)
    splits = SplitInputSerializer(many=True, required=False)

    def validate_splits(self, value):
        return _validate_unique_members(value)


class SplitReplaceSerializer(serializers.Serializer):
    """Validate input for replacing all splits of an expense."""

    splits = SplitInputSerializer(many=True, allow_empty=True)

    def validate_splits(self, value):
        return _validate_unique_members(value)


class ItemExpenseInputSerializer(serializers.Serializer):
    """
    Validate input for recording who paid for an itinerary item.

    Amount defaults to the item's cost when omitted.
    """

    payer_id = serializers.UUIDField()
    amount = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    description = serializers.CharField(max_length=500, required=False, allow_blank=True)
    splits = SplitInputSerializer(many=True, required=False, default=list)

    def validate_splits(self, value):
        return _validate_unique_members(value)


# =============================================================================
# Output Serializers
# =============================================================================

class ExpenseSplitSerializer(serializers.ModelSerializer):
    """Serializer for split rows."""

    member_name = serializers.CharField(source='member.display_name', read_only=True)

    class Meta:
        model = ExpenseSplit
        fields = ['id', 'member', 'member_name', 'share_type', 'share_value']
        read_only_fields = fields


class ExpenseSerializer(serializers.ModelSerializer):
    """Main serializer for expenses."""

    payer_name = serializers.CharField(source='payer.display_name', read_only=True)
    item_title = serializers.CharField(source='source_item.title', read_only=True, default=None)
    splits = ExpenseSplitSerializer(many=True, read_only=True)

    class Meta:
        model = Expense
        fields = [
            'id',
            'trip',
            'payer',
            'payer_name',
            'amount',
            'description',
            'source_item',
            'item_title',
            'is_standalone',
            'splits',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


# =============================================================================
# Settlement Report Serializers
# =============================================================================

class ReportMemberSerializer(serializers.Serializer):
    id = serializers.UUIDField(source='member_id')
    name = serializers.CharField()


class MemberBalanceSerializer(serializers.Serializer):
    member_id = serializers.UUIDField()
    member_name = serializers.CharField()
    total_paid = serializers.IntegerField()
    total_owed = serializers.IntegerField()
    balance = serializers.IntegerField()


class TransferSerializer(serializers.Serializer):
    """Suggested transfer. Exposed as ``from``/``to``, which are not valid field names."""

    from_member = serializers.UUIDField(source='from_member_id')
    from_name = serializers.CharField()
    to = serializers.UUIDField(source='to_member_id')
    to_name = serializers.CharField()
    amount = serializers.IntegerField()

    def get_fields(self):
        return {
            ('from' if name == 'from_member' else name): field
            for name, field in super().get_fields().items()
        }


class SettlementReportSerializer(serializers.Serializer):
    members = ReportMemberSerializer(many=True)
    balances = MemberBalanceSerializer(many=True)
    settlements = TransferSerializer(many=True)
    total_expenses = serializers.IntegerField()
