from django.db import models
from django.core.validators import MinValueValidator
import uuid


class ShareType(models.TextChoices):
    EQUAL = 'equal', 'Equal'
    PERCENTAGE = 'percentage', 'Percentage'
    AMOUNT = 'amount', 'Amount'


class Expense(models.Model):
    """
    Single payment event of a trip, paid by one member.

    Item-tied expenses record the cost of an itinerary item and carry
    ``source_item``; standalone expenses leave it empty. Both kinds go
    through the same apportionment.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    trip = models.ForeignKey(
        'trips.Trip',
        on_delete=models.CASCADE,
        related_name='expenses'
    )
    payer = models.ForeignKey(
        'trips.TripMember',
        on_delete=models.CASCADE,
        related_name='expenses_paid'
    )

    # Minor currency units
    amount = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    description = models.CharField(max_length=500, blank=True)

    source_item = models.ForeignKey(
        'trips.ItineraryItem',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='expenses'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'expenses'
        indexes = [
            models.Index(fields=['trip', 'created_at'], name='expenses_trip_created_idx'),
            models.Index(fields=['source_item'], name='expenses_source_item_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        label = self.description or (self.source_item.title if self.source_item else 'Expense')
        return f"{label} - {self.amount} ({self.payer.display_name})"

    @property
    def is_standalone(self):
        return self.source_item_id is None


class ExpenseSplit(models.Model):
    """One member's apportionment rule for an expense."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    expense = models.ForeignKey(
        Expense,
        on_delete=models.CASCADE,
        related_name='splits'
    )
    member = models.ForeignKey(
        'trips.TripMember',
        on_delete=models.CASCADE,
        related_name='expense_splits'
    )

    share_type = models.CharField(
        max_length=20,
        choices=ShareType.choices,
        default=ShareType.EQUAL
    )
    # Percentage (0-100) or fixed amount in minor units; unused for equal
    share_value = models.PositiveIntegerField(null=True, blank=True)

    class Meta:
        db_table = 'expense_splits'
        indexes = [
            models.Index(fields=['expense'], name='expense_splits_expense_idx'),
            models.Index(fields=['member'], name='expense_splits_member_idx'),
        ]

    def __str__(self):
        if self.share_type == ShareType.EQUAL:
            return f"{self.member.display_name}: equal"
        return f"{self.member.display_name}: {self.share_type} {self.share_value}"
