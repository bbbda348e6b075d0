from rest_framework import serializers
from .models import Room, Roommate, RoomType
from apps.accounts.serializers import UserMinimalSerializer


class RoommateSerializer(serializers.ModelSerializer):
    """Roommate as shown to other roommates."""

    user = UserMinimalSerializer(read_only=True)

    class Meta:
        model = Roommate
        fields = [
            'id',
            'user',
            'name',
            'email',
            'phone_number',
            'is_owner',
            'status',
            'joined_at',
        ]
        read_only_fields = fields


class RoomSerializer(serializers.ModelSerializer):
    """Main serializer for rooms."""

    roommates = serializers.SerializerMethodField()
    roommate_count = serializers.SerializerMethodField()
    is_owner = serializers.SerializerMethodField()

    class Meta:
        model = Room
        fields = [
            'id',
            'name',
            'address',
            'location',
            'type',
            'capacity',
            'invite_code',
            'roommates',
            'roommate_count',
            'is_owner',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'invite_code', 'created_at', 'updated_at']

    def get_roommates(self, obj):
        approved = [r for r in obj.roommates.all() if r.is_approved]
        return RoommateSerializer(approved, many=True).data

    def get_roommate_count(self, obj):
        return sum(1 for r in obj.roommates.all() if r.is_approved)

    def get_is_owner(self, obj):
        request = self.context.get('request')
        if request and request.user.is_authenticated:
            return obj.is_owner(request.user)
        return False


class RoomListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    roommate_count = serializers.SerializerMethodField()

    class Meta:
        model = Room
        fields = [
            'id',
            'name',
            'address',
            'type',
            'capacity',
            'roommate_count',
            'created_at',
        ]
        read_only_fields = fields

    def get_roommate_count(self, obj):
        return obj.approved_count()


class RoomPreviewSerializer(serializers.ModelSerializer):
    """What a prospective roommate sees before asking to join."""

    roommate_count = serializers.SerializerMethodField()

    class Meta:
        model = Room
        fields = ['id', 'name', 'address', 'location', 'type', 'capacity', 'roommate_count']
        read_only_fields = fields

    def get_roommate_count(self, obj):
        return obj.approved_count()


class RoomCreateSerializer(serializers.ModelSerializer):
    """Serializer for creating rooms."""

    owner_name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    phone_number = serializers.CharField(max_length=32, required=False, allow_blank=True)

    class Meta:
        model = Room
        fields = [
            'name',
            'address',
            'location',
            'type',
            'capacity',
            'owner_name',
            'email',
            'phone_number',
        ]


class RoomUpdateSerializer(serializers.Serializer):
    """Serializer for owner updates; every field is optional."""

    name = serializers.CharField(max_length=200, required=False)
    address = serializers.CharField(max_length=300, required=False)
    location = serializers.CharField(max_length=200, required=False, allow_blank=True)
    type = serializers.ChoiceField(choices=RoomType.choices, required=False)
    capacity = serializers.IntegerField(min_value=1, required=False)


class JoinRoomSerializer(serializers.Serializer):
    """Serializer for asking to join a room with an invite code."""

    invite_code = serializers.CharField(max_length=16, required=True)
    name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    phone_number = serializers.CharField(max_length=32, required=False, allow_blank=True)


class RoommateActionSerializer(serializers.Serializer):
    """Serializer for owner actions targeting a single roommate."""

    roommate_id = serializers.UUIDField(required=True)


class BalanceLineSerializer(serializers.Serializer):
    debtor_id = serializers.UUIDField()
    debtor_name = serializers.CharField()
    creditor_id = serializers.UUIDField()
    creditor_name = serializers.CharField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)


class RoommateTotalsSerializer(serializers.Serializer):
    roommate_id = serializers.UUIDField()
    name = serializers.CharField()
    owes = serializers.DecimalField(max_digits=12, decimal_places=2)
    is_owed = serializers.DecimalField(max_digits=12, decimal_places=2)


class BalanceSummarySerializer(serializers.Serializer):
    """Output of the balances endpoint."""

    balances = serializers.DictField(
        child=serializers.DictField(
            child=serializers.DecimalField(max_digits=12, decimal_places=2)
        )
    )
    totals = RoommateTotalsSerializer(many=True)
    lines = BalanceLineSerializer(many=True)
