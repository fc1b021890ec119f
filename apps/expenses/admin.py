# ==========================================
# apps/expenses/admin.py
# ==========================================

from django.contrib import admin
from apps.expenses.models import Expense, ExpenseSplit


class ExpenseSplitInline(admin.TabularInline):
    """Inline admin for expense splits."""
    model = ExpenseSplit
    extra = 0
    fields = ['member', 'share_type', 'share_value']


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    """Admin interface for Expenses."""

    list_display = ['__str__', 'trip', 'payer', 'amount', 'is_standalone', 'split_count', 'created_at']
    list_filter = ['created_at']
    search_fields = ['description', 'trip__title', 'payer__display_name', 'source_item__title']
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['trip', 'payer', 'source_item']
    inlines = [ExpenseSplitInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('trip', 'payer', 'source_item').prefetch_related('splits')

    def split_count(self, obj):
        """Show number of split rules (0 = even split across the trip)."""
        return len(obj.splits.all())
    split_count.short_description = 'Splits'

    @admin.display(boolean=True, description='Standalone')
    def is_standalone(self, obj):
        return obj.is_standalone


@admin.register(ExpenseSplit)
class ExpenseSplitAdmin(admin.ModelAdmin):
    """Admin interface for Expense Splits."""

    list_display = ['expense', 'member', 'share_type', 'share_value']
    list_filter = ['share_type']
    search_fields = ['member__display_name', 'expense__description']
    raw_id_fields = ['expense', 'member']

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('expense', 'member')
