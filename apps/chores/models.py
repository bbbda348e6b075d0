from django.db import models
import uuid


class ChoreFrequency(models.TextChoices):
    DAILY = 'daily', 'Daily'
    WEEKLY = 'weekly', 'Weekly'
    MONTHLY = 'monthly', 'Monthly'
    ONCE = 'once', 'Once'


class Chore(models.Model):
    """Recurring or one-off household task."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    room = models.ForeignKey(
        'rooms.Room',
        on_delete=models.CASCADE,
        related_name='chores'
    )
    title = models.CharField(max_length=200)
    assigned_to = models.ForeignKey(
        'rooms.Roommate',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='chores'
    )
    frequency = models.CharField(
        max_length=20,
        choices=ChoreFrequency.choices,
        default=ChoreFrequency.WEEKLY
    )
    due_date = models.DateField(null=True, blank=True)
    completed = models.BooleanField(default=False)
    completed_at = models.DateTimeField(null=True, blank=True)
    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='chores_created'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'chores'
        indexes = [
            models.Index(fields=['room', 'completed'], name='chores_room_completed_idx'),
        ]
        ordering = ['completed', 'due_date', '-created_at']

    def __str__(self):
        return self.title
