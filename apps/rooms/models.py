# ==========================================
# apps/rooms/models.py
# ==========================================

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
import uuid
import secrets

INVITE_CODE_ALPHABET = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789'


def generate_invite_code(length=None):
    length = length or settings.INVITE_CODE_LENGTH
    return ''.join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(length))


class RoomType(models.TextChoices):
    APARTMENT = 'apartment', 'Apartment'
    HOUSE = 'house', 'House'
    DORM = 'dorm', 'Dorm'
    OTHER = 'other', 'Other'


class RoommateStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    APPROVED = 'approved', 'Approved'


class Room(models.Model):
    """Shared-living unit grouping roommates, expenses and chores."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    address = models.CharField(max_length=300)
    location = models.CharField(max_length=200, blank=True)
    type = models.CharField(max_length=20, choices=RoomType.choices, default=RoomType.APARTMENT)
    capacity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    invite_code = models.CharField(max_length=16, unique=True, db_index=True, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'rooms'
        ordering = ['-created_at']

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.invite_code:
            self.invite_code = generate_invite_code()
        super().save(*args, **kwargs)

    @property
    def owner(self):
        return self.roommates.filter(is_owner=True).first()

    def get_roommate(self, user, status=RoommateStatus.APPROVED):
        """Return the user's roommate entry in this room, or None."""
        if user is None or not user.is_authenticated:
            return None
        queryset = self.roommates.filter(user=user)
        if status is not None:
            queryset = queryset.filter(status=status)
        return queryset.first()

    def has_roommate(self, user):
        return self.get_roommate(user) is not None

    def is_owner(self, user):
        roommate = self.get_roommate(user)
        return roommate is not None and roommate.is_owner

    def approved_count(self):
        return self.roommates.filter(status=RoommateStatus.APPROVED).count()

    def is_full(self):
        return self.approved_count() >= self.capacity


class Roommate(models.Model):
    """Member of a room, optionally its owner."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    room = models.ForeignKey(Room, on_delete=models.CASCADE, related_name='roommates')
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='roommates'
    )
    name = models.CharField(max_length=100)
    email = models.EmailField(blank=True)
    phone_number = models.CharField(max_length=32, blank=True)
    is_owner = models.BooleanField(default=False)
    status = models.CharField(
        max_length=20,
        choices=RoommateStatus.choices,
        default=RoommateStatus.PENDING
    )
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'roommates'
        constraints = [
            models.UniqueConstraint(fields=['room', 'user'], name='unique_room_user'),
        ]
        indexes = [
            models.Index(fields=['room', 'status'], name='roommates_room_status_idx'),
        ]
        ordering = ['-is_owner', 'joined_at']

    def __str__(self):
        return f"{self.name} in {self.room.name} ({self.status})"

    @property
    def is_approved(self):
        return self.status == RoommateStatus.APPROVED
