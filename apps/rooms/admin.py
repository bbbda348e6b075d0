# ==========================================
# apps/rooms/admin.py
# ==========================================

from django.contrib import admin
from apps.rooms.models import Room, Roommate


class RoommateInline(admin.TabularInline):
    """Inline admin for roommates."""
    model = Roommate
    extra = 0
    fields = ['name', 'user', 'is_owner', 'status', 'joined_at']
    readonly_fields = ['joined_at']


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    """Admin interface for Rooms."""

    list_display = [
        'name',
        'type',
        'roommate_count',
        'capacity',
        'invite_code',
        'created_at'
    ]
    list_filter = ['type', 'created_at']
    search_fields = ['name', 'address', 'invite_code']
    readonly_fields = ['invite_code', 'created_at', 'updated_at']
    inlines = [RoommateInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'address', 'location', 'type', 'capacity')
        }),
        ('Invitation', {
            'fields': ('invite_code',)
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    @admin.display(description='Roommates')
    def roommate_count(self, obj):
        return obj.approved_count()


@admin.register(Roommate)
class RoommateAdmin(admin.ModelAdmin):
    """Admin interface for Roommates."""

    list_display = ['name', 'room', 'user', 'is_owner', 'status', 'joined_at']
    list_filter = ['status', 'is_owner']
    search_fields = ['name', 'email', 'room__name']
    raw_id_fields = ['room', 'user']
