from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.rooms.models import RoommateStatus
from apps.rooms.services import RoomNotFoundError, NotRoommateError

from .models import Chore
from .serializers import ChoreSerializer, ChoreCreateSerializer, ChoreFilterSerializer
from .services import (
    create_chore,
    complete_chore,
    reopen_chore,
    InvalidAssigneeError,
    InvalidChoreStateError,
)


@extend_schema(
    parameters=[
        OpenApiParameter('room', str, description='Room ID'),
        OpenApiParameter('completed', bool, description='Completion flag'),
    ],
    tags=['chores'],
)
class ChoreViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet
):
    """Room chores board."""

    serializer_class = ChoreSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        queryset = (
            Chore.objects
            .filter(
                room__roommates__user=self.request.user,
                room__roommates__status=RoommateStatus.APPROVED,
            )
            .select_related('assigned_to')
            .distinct()
        )

        if self.action != 'list':
            return queryset

        filter_serializer = ChoreFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        if params.get('room'):
            queryset = queryset.filter(room_id=params['room'])
        if params.get('completed') is not None:
            queryset = queryset.filter(completed=params['completed'])

        return queryset

    @extend_schema(request=ChoreCreateSerializer, responses={201: ChoreSerializer})
    def create(self, request, *args, **kwargs):
        serializer = ChoreCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            chore = create_chore(
                room_id=data['room'],
                title=data['title'],
                created_by=request.user,
                assigned_to_id=data.get('assigned_to'),
                frequency=data['frequency'],
                due_date=data.get('due_date'),
            )
        except RoomNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except NotRoommateError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except InvalidAssigneeError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ChoreSerializer(chore).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={200: ChoreSerializer})
    @action(detail=True, methods=['post'])
    def complete(self, request, pk=None):
        chore = self.get_object()
        try:
            chore = complete_chore(chore_id=chore.id, user=request.user)
        except InvalidChoreStateError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(ChoreSerializer(chore).data)

    @extend_schema(request=None, responses={200: ChoreSerializer})
    @action(detail=True, methods=['post'])
    def reopen(self, request, pk=None):
        chore = self.get_object()
        try:
            chore = reopen_chore(chore_id=chore.id, user=request.user)
        except InvalidChoreStateError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(ChoreSerializer(chore).data)
