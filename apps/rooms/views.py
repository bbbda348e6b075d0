import uuid

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .models import Room, RoommateStatus
from .serializers import (
    RoomSerializer,
    RoomCreateSerializer,
    RoomUpdateSerializer,
    RoomListSerializer,
    RoomPreviewSerializer,
    RoommateSerializer,
    JoinRoomSerializer,
    RoommateActionSerializer,
    BalanceSummarySerializer,
)
from .permissions import IsRoommate, IsRoomOwner

from apps.rooms.services import (
    create_room,
    update_room,
    delete_room,
    find_room_by_invite_code,
    request_to_join,
    approve_roommate,
    decline_roommate,
    remove_roommate,
    leave_room,
    get_roommates,
    regenerate_invite_code,
    # Exceptions
    RoomNotFoundError,
    InvalidInviteCodeError,
    AlreadyRoommateError,
    RoomFullError,
    RoommateNotFoundError,
    NotRoommateError,
    InvalidRoommateStateError,
    OwnerCannotLeaveError,
    CannotRemoveOwnerError,
    RoommateHasOpenExpensesError,
    InsufficientPermissionsError,
)
from apps.expenses.services import get_balance_summary, LedgerError


class RoomPagination(PageNumberPagination):
    """Custom pagination for rooms."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class RoomViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Room CRUD operations and the roommate workflow.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Rooms where the user is an approved roommate
    create: Create a room (creator becomes owner)
    retrieve: Get a specific room
    partial_update: Update a room (owner only)
    destroy: Delete a room (owner only)
    """

    serializer_class = RoomSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = RoomPagination
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']

    def get_queryset(self):
        """Return only rooms where user is an approved roommate."""
        return Room.objects.filter(
            roommates__user=self.request.user,
            roommates__status=RoommateStatus.APPROVED,
        ).prefetch_related('roommates__user').distinct()

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return RoomListSerializer
        elif self.action == 'create':
            return RoomCreateSerializer
        return RoomSerializer

    def get_permissions(self):
        """Set permissions based on action."""
        if self.action in [
            'partial_update', 'destroy', 'pending', 'approve',
            'decline', 'remove_roommate', 'regenerate_invite',
        ]:
            return [IsAuthenticated(), IsRoomOwner()]
        if self.action in ['retrieve', 'roommates', 'balances']:
            return [IsAuthenticated(), IsRoommate()]
        return [IsAuthenticated()]

    def create(self, request, *args, **kwargs):
        """Create a new room."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        room = create_room(
            name=data['name'],
            address=data['address'],
            capacity=data['capacity'],
            user=request.user,
            owner_name=data.get('owner_name', ''),
            type=data.get('type', Room._meta.get_field('type').default),
            location=data.get('location', ''),
            email=data.get('email', ''),
            phone_number=data.get('phone_number', ''),
        )

        output_serializer = RoomSerializer(room, context={'request': request})
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    @extend_schema(request=RoomUpdateSerializer, responses={200: RoomSerializer})
    def partial_update(self, request, *args, **kwargs):
        """Update room details."""
        room = self.get_object()
        serializer = RoomUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            room = update_room(room_id=room.id, user=request.user, **serializer.validated_data)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except ValueError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(RoomSerializer(room, context={'request': request}).data)

    def destroy(self, request, *args, **kwargs):
        """Delete a room."""
        room = self.get_object()
        try:
            delete_room(room_id=room.id, user=request.user)
            return Response(status=status.HTTP_204_NO_CONTENT)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    @extend_schema(
        parameters=[OpenApiParameter('invite_code', str, required=True)],
        responses={200: RoomPreviewSerializer},
    )
    @action(detail=False, methods=['get'])
    def lookup(self, request):
        """Preview the room behind an invite code before joining."""
        try:
            room = find_room_by_invite_code(invite_code=request.query_params.get('invite_code', ''))
        except InvalidInviteCodeError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(RoomPreviewSerializer(room).data)

    @extend_schema(request=JoinRoomSerializer, responses={201: RoommateSerializer})
    @action(detail=False, methods=['post'])
    def join(self, request):
        """Ask to join a room using its invite code."""
        serializer = JoinRoomSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            roommate = request_to_join(
                invite_code=data['invite_code'],
                user=request.user,
                name=data.get('name', ''),
                email=data.get('email', ''),
                phone_number=data.get('phone_number', ''),
            )
        except InvalidInviteCodeError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (AlreadyRoommateError, RoomFullError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(RoommateSerializer(roommate).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: RoommateSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def roommates(self, request, pk=None):
        """Approved roommates, owner first."""
        room = self.get_object()
        serializer = RoommateSerializer(get_roommates(room_id=room.id), many=True)
        return Response(serializer.data)

    @extend_schema(responses={200: RoommateSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def pending(self, request, pk=None):
        """Join requests awaiting approval (owner only)."""
        room = self.get_object()
        pending = get_roommates(room_id=room.id, status=RoommateStatus.PENDING)
        return Response(RoommateSerializer(pending, many=True).data)

    @extend_schema(request=RoommateActionSerializer, responses={200: RoommateSerializer})
    @action(detail=True, methods=['post'])
    def approve(self, request, pk=None):
        """Approve a pending roommate (owner only)."""
        room = self.get_object()
        serializer = RoommateActionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            roommate = approve_roommate(
                room_id=room.id,
                roommate_id=serializer.validated_data['roommate_id'],
                approved_by=request.user
            )
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except RoommateNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (InvalidRoommateStateError, RoomFullError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(RoommateSerializer(roommate).data)

    @extend_schema(request=RoommateActionSerializer, responses={204: None})
    @action(detail=True, methods=['post'])
    def decline(self, request, pk=None):
        """Decline a pending roommate (owner only)."""
        room = self.get_object()
        serializer = RoommateActionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            decline_roommate(
                room_id=room.id,
                roommate_id=serializer.validated_data['roommate_id'],
                declined_by=request.user
            )
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except RoommateNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidRoommateStateError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=RoommateActionSerializer, responses={204: None})
    @action(detail=True, methods=['delete'])
    def remove_roommate(self, request, pk=None):
        """Remove a roommate from the room (owner only)."""
        room = self.get_object()
        serializer = RoommateActionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            remove_roommate(
                room_id=room.id,
                roommate_id=serializer.validated_data['roommate_id'],
                removed_by=request.user
            )
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except RoommateNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (CannotRemoveOwnerError, RoommateHasOpenExpensesError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=None, responses={204: None})
    @action(detail=True, methods=['post'])
    def leave(self, request, pk=None):
        """Leave a room, or withdraw a pending request."""
        # Pending roommates cannot see the room, so no get_object() here
        try:
            room_id = uuid.UUID(str(pk))
        except ValueError:
            return Response({'error': 'Room not found'}, status=status.HTTP_404_NOT_FOUND)

        try:
            leave_room(room_id=room_id, user=request.user)
        except (RoomNotFoundError, NotRoommateError) as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (OwnerCannotLeaveError, RoommateHasOpenExpensesError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=None)
    @action(detail=True, methods=['post'])
    def regenerate_invite(self, request, pk=None):
        """Regenerate invite code (owner only)."""
        room = self.get_object()
        try:
            new_code = regenerate_invite_code(room_id=room.id, user=request.user)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response({
            'invite_code': new_code,
            'message': 'Invite code regenerated successfully'
        })

    @extend_schema(responses={200: BalanceSummarySerializer})
    @action(detail=True, methods=['get'])
    def balances(self, request, pk=None):
        """Who owes whom, from the room's unsettled expenses."""
        room = self.get_object()
        try:
            summary = get_balance_summary(room_id=room.id)
        except LedgerError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

        return Response(BalanceSummarySerializer(summary).data)
