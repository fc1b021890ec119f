# ==========================================
# apps/trips/models.py
# ==========================================

from django.db import models
import uuid
import secrets


MEMBER_NAME_MAX_LENGTH = 50


class CollaboratorRole(models.TextChoices):
    VIEWER = 'viewer', 'Viewer'
    EDITOR = 'editor', 'Editor'


class Trip(models.Model):
    """Shared trip. Only the fields the expense pool needs live here."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=200)
    # Trips created without an account are open to everyone
    owner = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='trips'
    )
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'trips'
        indexes = [
            models.Index(fields=['owner', 'created_at'], name='trips_owner_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.title

    def is_owner(self, user):
        if self.owner_id is None:
            return True
        return bool(user and user.is_authenticated and self.owner_id == user.pk)

    def get_collaborator_role(self, user):
        if not (user and user.is_authenticated):
            return None
        collaborator = self.collaborators.filter(user=user).first()
        return collaborator.role if collaborator else None

    def has_active_share_token(self, token):
        if not token:
            return False
        return self.share_tokens.filter(token=token, is_active=True).exists()

    def can_view(self, user, share_token=None):
        if self.is_owner(user) or self.get_collaborator_role(user) is not None:
            return True
        return self.has_active_share_token(share_token)

    def can_edit(self, user):
        if self.is_owner(user):
            return True
        return self.get_collaborator_role(user) == CollaboratorRole.EDITOR


class ItineraryItem(models.Model):
    """Itinerary entry whose cost can be recorded as an item-tied expense."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    trip = models.ForeignKey(Trip, on_delete=models.CASCADE, related_name='items')
    title = models.CharField(max_length=200)
    # Minor currency units
    cost = models.PositiveIntegerField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'itinerary_items'
        ordering = ['created_at']

    def __str__(self):
        return self.title


class TripCollaborator(models.Model):
    """Account invited to a trip with a viewer or editor role."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    trip = models.ForeignKey(Trip, on_delete=models.CASCADE, related_name='collaborators')
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='trip_collaborations')
    role = models.CharField(max_length=20, choices=CollaboratorRole.choices, default=CollaboratorRole.VIEWER)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'trip_collaborators'
        unique_together = [['trip', 'user']]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.user} on {self.trip} ({self.role})"


class ShareToken(models.Model):
    """Read-only share link for a trip."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    trip = models.ForeignKey(Trip, on_delete=models.CASCADE, related_name='share_tokens')
    token = models.CharField(max_length=32, unique=True, db_index=True, editable=False)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'share_tokens'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.trip} ({'active' if self.is_active else 'revoked'})"

    def save(self, *args, **kwargs):
        if not self.token:
            self.token = secrets.token_urlsafe(24)[:32]
        super().save(*args, **kwargs)


class TripMember(models.Model):
    """Participant of a trip's expense pool, optionally linked to an account."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    trip = models.ForeignKey(Trip, on_delete=models.CASCADE, related_name='members')
    display_name = models.CharField(max_length=MEMBER_NAME_MAX_LENGTH)
    linked_account = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='trip_memberships'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'trip_members'
        indexes = [
            models.Index(fields=['trip', 'created_at'], name='trip_members_trip_created_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['trip', 'linked_account'],
                condition=models.Q(linked_account__isnull=False),
                name='unique_linked_account_per_trip',
            ),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.display_name} in {self.trip.title}"
