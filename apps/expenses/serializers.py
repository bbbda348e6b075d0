from decimal import Decimal
from rest_framework import serializers
from .models import Expense, ExpenseCategory
from .services.balance_ledger import round_currency


# =============================================================================
# Input Serializers
# =============================================================================

class ExpenseFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for expense filtering.

    Query Parameters:
        room (UUID): Filter by room ID
        settled (bool): Filter by settlement flag
        category (str): Filter by category
    """

    room = serializers.UUIDField(required=False)
    settled = serializers.BooleanField(required=False, allow_null=True)
    category = serializers.ChoiceField(choices=ExpenseCategory.choices, required=False)


class ExpenseCreateSerializer(serializers.Serializer):
    """Validate input for logging an expense."""

    room = serializers.UUIDField()
    title = serializers.CharField(max_length=200)
    amount = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=Decimal('0.01')
    )
    paid_by = serializers.UUIDField()
    shared_with = serializers.ListField(
        child=serializers.UUIDField(),
        allow_empty=False,
        help_text="Roommate IDs splitting the cost evenly; may include the payer."
    )
    category = serializers.ChoiceField(
        choices=ExpenseCategory.choices,
        default=ExpenseCategory.GENERAL
    )
    date = serializers.DateField(required=False)
    receipt = serializers.URLField(required=False, allow_blank=True, default='')


# =============================================================================
# Output Serializers
# =============================================================================

class ExpenseSerializer(serializers.ModelSerializer):
    """Main serializer for expenses."""

    paid_by_name = serializers.SerializerMethodField()
    shared_with = serializers.SerializerMethodField()
    share_amount = serializers.SerializerMethodField()

    class Meta:
        model = Expense
        fields = [
            'id',
            'room',
            'title',
            'amount',
            'paid_by',
            'paid_by_name',
            'shared_with',
            'share_amount',
            'category',
            'date',
            'receipt',
            'settled',
            'settled_at',
            'created_by',
            'created_at',
        ]
        read_only_fields = fields

    def get_paid_by_name(self, obj):
        return obj.paid_by.name if obj.paid_by else None

    def get_shared_with(self, obj):
        return [str(rid) for rid in obj.get_sharer_ids()]

    def get_share_amount(self, obj):
        """Per-person share, rounded for display only."""
        sharers = obj.get_sharer_ids()
        if not sharers:
            return None
        return str(round_currency(obj.amount / len(sharers)))
