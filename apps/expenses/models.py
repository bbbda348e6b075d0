from django.core.validators import MinValueValidator
from django.db import models
from decimal import Decimal
import datetime
import uuid


class ExpenseCategory(models.TextChoices):
    GENERAL = 'general', 'General'
    GROCERIES = 'groceries', 'Groceries'
    RENT = 'rent', 'Rent'
    UTILITIES = 'utilities', 'Utilities'
    INTERNET = 'internet', 'Internet'
    ENTERTAINMENT = 'entertainment', 'Entertainment'
    HOUSEHOLD = 'household', 'Household'
    OTHER = 'other', 'Other'


class Expense(models.Model):
    """Shared cost paid by one roommate and split evenly among sharers."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    room = models.ForeignKey(
        'rooms.Room',
        on_delete=models.CASCADE,
        related_name='expenses'
    )
    title = models.CharField(max_length=200)
    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )

    # Nullable so settled history survives a roommate's removal
    paid_by = models.ForeignKey(
        'rooms.Roommate',
        on_delete=models.SET_NULL,
        null=True,
        related_name='expenses_paid'
    )

    category = models.CharField(
        max_length=20,
        choices=ExpenseCategory.choices,
        default=ExpenseCategory.GENERAL
    )
    date = models.DateField(default=datetime.date.today)
    receipt = models.URLField(blank=True)

    # One-way: False -> True
    settled = models.BooleanField(default=False)
    settled_at = models.DateTimeField(null=True, blank=True)

    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='expenses_created'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'expenses'
        indexes = [
            models.Index(fields=['room', 'settled'], name='expenses_room_settled_idx'),
            models.Index(fields=['room', 'date'], name='expenses_room_date_idx'),
        ]
        ordering = ['-date', '-created_at']

    def __str__(self):
        state = 'settled' if self.settled else 'open'
        return f"{self.title} - {self.amount} ({state})"

    def get_sharer_ids(self):
        return [share.roommate_id for share in self.shares.all()]


class ExpenseShare(models.Model):
    """A roommate who consumed, and owes part of, an expense."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    expense = models.ForeignKey(
        Expense,
        on_delete=models.CASCADE,
        related_name='shares'
    )
    roommate = models.ForeignKey(
        'rooms.Roommate',
        on_delete=models.CASCADE,
        related_name='expense_shares'
    )

    class Meta:
        db_table = 'expense_shares'
        unique_together = [['expense', 'roommate']]

    def __str__(self):
        return f"{self.roommate.name} shares {self.expense.title}"
