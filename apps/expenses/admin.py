from django.contrib import admin
from django.utils import timezone
from apps.expenses.models import Expense, ExpenseShare


class ExpenseShareInline(admin.TabularInline):
    """Read-only view of who shares an expense; shares are set through the API."""
    model = ExpenseShare
    extra = 0
    readonly_fields = ['roommate']
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    """Admin interface for Expenses."""

    list_display = ['title', 'room', 'amount', 'paid_by', 'category', 'date', 'settled']
    list_filter = ['settled', 'category', 'date']
    search_fields = ['title', 'room__name', 'paid_by__name']
    # Settling is one-way and goes through mark_settled
    readonly_fields = ['settled', 'settled_at', 'created_at', 'updated_at']
    raw_id_fields = ['room', 'paid_by', 'created_by']
    inlines = [ExpenseShareInline]
    date_hierarchy = 'date'
    ordering = ['-date']

    actions = ['mark_settled']

    @admin.action(description='Mark selected expenses settled')
    def mark_settled(self, request, queryset):
        updated = queryset.filter(settled=False).update(settled=True, settled_at=timezone.now())
        self.message_user(request, f"Settled {updated} expenses")
