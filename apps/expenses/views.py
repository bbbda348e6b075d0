from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.rooms.models import RoommateStatus
from apps.rooms.services import RoomNotFoundError, NotRoommateError

from .models import Expense
from .serializers import (
    ExpenseSerializer,
    ExpenseCreateSerializer,
    ExpenseFilterSerializer,
)
from .services import (
    add_expense,
    settle_expense,
    delete_expense,
    # Exceptions
    ExpenseNotFoundError,
    InvalidParticipantError,
    NoSharersError,
    ExpenseAlreadySettledError,
    InsufficientPermissionsError,
    InvalidExpenseAmountError,
)


class ExpensePagination(PageNumberPagination):
    """Custom pagination for expenses."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


@extend_schema(
    parameters=[
        OpenApiParameter('room', str, description='Room ID'),
        OpenApiParameter('settled', bool, description='Settlement flag'),
        OpenApiParameter('category', str, description='Expense category'),
    ],
    tags=['expenses'],
)
class ExpenseViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet
):
    """
    ViewSet for shared expenses.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Expenses in rooms where the user is an approved roommate
    create: Log an expense
    retrieve: Get a specific expense
    destroy: Delete an unsettled expense (payer or room owner)
    settle: Mark an expense settled
    """

    serializer_class = ExpenseSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = ExpensePagination

    def get_queryset(self):
        """Only expenses of rooms the user belongs to."""
        queryset = (
            Expense.objects
            .filter(
                room__roommates__user=self.request.user,
                room__roommates__status=RoommateStatus.APPROVED,
            )
            .select_related('paid_by')
            .prefetch_related('shares')
            .distinct()
        )

        if self.action != 'list':
            return queryset

        filter_serializer = ExpenseFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        if params.get('room'):
            queryset = queryset.filter(room_id=params['room'])
        if params.get('settled') is not None:
            queryset = queryset.filter(settled=params['settled'])
        if params.get('category'):
            queryset = queryset.filter(category=params['category'])

        return queryset

    @extend_schema(request=ExpenseCreateSerializer, responses={201: ExpenseSerializer})
    def create(self, request, *args, **kwargs):
        """Log an expense."""
        serializer = ExpenseCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            expense = add_expense(
                room_id=data['room'],
                title=data['title'],
                amount=data['amount'],
                paid_by_id=data['paid_by'],
                shared_with_ids=data['shared_with'],
                created_by=request.user,
                category=data['category'],
                date=data.get('date'),
                receipt=data['receipt'],
            )
        except RoomNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except NotRoommateError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except (InvalidParticipantError, NoSharersError, InvalidExpenseAmountError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ExpenseSerializer(expense).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):
        """Delete an unsettled expense."""
        expense = self.get_object()
        try:
            delete_expense(expense_id=expense.id, user=request.user)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except ExpenseAlreadySettledError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=None, responses={200: ExpenseSerializer})
    @action(detail=True, methods=['post'])
    def settle(self, request, pk=None):
        """Mark an expense settled."""
        expense = self.get_object()
        try:
            expense = settle_expense(expense_id=expense.id, user=request.user)
        except ExpenseNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except NotRoommateError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except ExpenseAlreadySettledError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ExpenseSerializer(expense).data)
