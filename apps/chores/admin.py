from django.contrib import admin
from apps.chores.models import Chore


@admin.register(Chore)
class ChoreAdmin(admin.ModelAdmin):
    list_display = ['title', 'room', 'assigned_to', 'frequency', 'due_date', 'completed']
    list_filter = ['completed', 'frequency']
    search_fields = ['title', 'room__name']
    raw_id_fields = ['room', 'assigned_to', 'created_by']
