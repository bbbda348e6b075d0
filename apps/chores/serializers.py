from rest_framework import serializers
from .models import Chore, ChoreFrequency


class ChoreFilterSerializer(serializers.Serializer):
    room = serializers.UUIDField(required=False)
    completed = serializers.BooleanField(required=False, allow_null=True)


class ChoreCreateSerializer(serializers.Serializer):
    room = serializers.UUIDField()
    title = serializers.CharField(max_length=200)
    assigned_to = serializers.UUIDField(required=False, allow_null=True)
    frequency = serializers.ChoiceField(
        choices=ChoreFrequency.choices,
        default=ChoreFrequency.WEEKLY
    )
    due_date = serializers.DateField(required=False, allow_null=True)


class ChoreSerializer(serializers.ModelSerializer):
    assigned_to_name = serializers.SerializerMethodField()

    class Meta:
        model = Chore
        fields = [
            'id',
            'room',
            'title',
            'assigned_to',
            'assigned_to_name',
            'frequency',
            'due_date',
            'completed',
            'completed_at',
            'created_at',
        ]
        read_only_fields = fields

    def get_assigned_to_name(self, obj):
        return obj.assigned_to.name if obj.assigned_to else None
