# ==========================================
# apps/trips/admin.py
# ==========================================

from django.contrib import admin
from apps.trips.models import Trip, TripMember, ItineraryItem, TripCollaborator, ShareToken


class TripMemberInline(admin.TabularInline):
    """Inline admin for trip members."""
    model = TripMember
    extra = 0
    fields = ['display_name', 'linked_account', 'created_at']
    readonly_fields = ['created_at']


class ItineraryItemInline(admin.TabularInline):
    """Inline admin for itinerary items."""
    model = ItineraryItem
    extra = 0
    fields = ['title', 'cost', 'created_at']
    readonly_fields = ['created_at']


@admin.register(Trip)
class TripAdmin(admin.ModelAdmin):
    """Admin interface for Trips."""

    list_display = ['title', 'owner', 'member_count', 'start_date', 'end_date', 'created_at']
    list_filter = ['created_at']
    search_fields = ['title', 'owner__email']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [TripMemberInline, ItineraryItemInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def member_count(self, obj):
        """Show number of expense pool members."""
        return obj.members.count()
    member_count.short_description = 'Members'


@admin.register(TripMember)
class TripMemberAdmin(admin.ModelAdmin):
    """Admin interface for Trip Members."""

    list_display = ['display_name', 'trip', 'linked_account', 'created_at']
    search_fields = ['display_name', 'trip__title', 'linked_account__email']
    readonly_fields = ['created_at']
    ordering = ['-created_at']

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('trip', 'linked_account')


@admin.register(TripCollaborator)
class TripCollaboratorAdmin(admin.ModelAdmin):
    list_display = ['user', 'trip', 'role', 'created_at']
    list_filter = ['role']
    search_fields = ['user__email', 'trip__title']


@admin.register(ShareToken)
class ShareTokenAdmin(admin.ModelAdmin):
    """Admin interface for share links."""

    list_display = ['trip', 'token', 'is_active', 'created_at']
    list_filter = ['is_active']
    search_fields = ['token', 'trip__title']
    readonly_fields = ['token', 'created_at']

    actions = ['revoke_tokens']

    def revoke_tokens(self, request, queryset):
        """Deactivate selected share links."""
        count = queryset.update(is_active=False)
        self.message_user(request, f"Revoked {count} share link(s)")
    revoke_tokens.short_description = "Revoke share links"
