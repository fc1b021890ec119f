from rest_framework import viewsets, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.trips.permissions import CanAccessTripExpenses
from apps.trips.services import TripNotFoundError, ItemNotFoundError

from .serializers import (
    ExpenseSerializer,
    SettlementReportSerializer,
    # Input serializers
    ExpenseCreateSerializer,
    ExpenseUpdateSerializer,
    SplitReplaceSerializer,
    ItemExpenseInputSerializer,
)
from .services import (
    list_trip_expenses,
    get_expense,
    create_expense,
    update_expense,
    replace_expense_splits,
    delete_expense,
    get_item_expense,
    set_item_expense,
    clear_item_expense,
    get_settlement_report,
    UNCHANGED,
    # Exceptions
    ExpensesServiceError,
    ExpenseNotFoundError,
)

NOT_FOUND_ERRORS = (TripNotFoundError, ItemNotFoundError, ExpenseNotFoundError)
SERVICE_ERRORS = NOT_FOUND_ERRORS + (ExpensesServiceError,)


def _error_response(e):
    """Map a service exception to an error response."""
    if isinstance(e, NOT_FOUND_ERRORS):
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)


class ExpenseViewSet(viewsets.ViewSet):
    """
    Expenses of a trip, item-tied and standalone.

    list: Get all expenses with their splits, newest first
    create: Record an expense (optionally with splits)
    retrieve: Get a specific expense
    update / partial_update: Change payer, amount, description, item or splits
    destroy: Delete an expense and its splits
    splits: Replace the split set of an expense
    """

    permission_classes = [CanAccessTripExpenses]

    def list(self, request, trip_id=None):
        try:
            expenses = list_trip_expenses(trip_id=trip_id)
        except TripNotFoundError as e:
            return _error_response(e)

        return Response({'expenses': ExpenseSerializer(expenses, many=True).data})

    @extend_schema(request=ExpenseCreateSerializer, responses={201: ExpenseSerializer})
    def create(self, request, trip_id=None):
        serializer = ExpenseCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            expense = create_expense(
                trip_id=trip_id,
                payer_id=data['payer_id'],
                amount=data['amount'],
                description=data.get('description', ''),
                source_item_id=data.get('item_id'),
                splits=data.get('splits'),
            )
        except SERVICE_ERRORS as e:
            return _error_response(e)

        return Response(
            {'expense': ExpenseSerializer(expense).data},
            status=status.HTTP_201_CREATED
        )

    def retrieve(self, request, trip_id=None, pk=None):
        try:
            expense = get_expense(trip_id=trip_id, expense_id=pk)
        except SERVICE_ERRORS as e:
            return _error_response(e)

        return Response({'expense': ExpenseSerializer(expense).data})

    @extend_schema(request=ExpenseUpdateSerializer, responses={200: ExpenseSerializer})
    def update(self, request, trip_id=None, pk=None):
        serializer = ExpenseUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            expense = update_expense(
                trip_id=trip_id,
                expense_id=pk,
                payer_id=data.get('payer_id'),
                amount=data.get('amount'),
                description=data.get('description'),
                source_item_id=data['item_id'] if 'item_id' in data else UNCHANGED,
                splits=data.get('splits'),
            )
        except SERVICE_ERRORS as e:
            return _error_response(e)

        return Response({'expense': ExpenseSerializer(expense).data})

    def partial_update(self, request, trip_id=None, pk=None):
        return self.update(request, trip_id=trip_id, pk=pk)

    def destroy(self, request, trip_id=None, pk=None):
        try:
            delete_expense(trip_id=trip_id, expense_id=pk)
        except SERVICE_ERRORS as e:
            return _error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=SplitReplaceSerializer, responses={200: ExpenseSerializer})
    def splits(self, request, trip_id=None, pk=None):
        serializer = SplitReplaceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            expense = replace_expense_splits(
                trip_id=trip_id,
                expense_id=pk,
                splits=serializer.validated_data['splits'],
            )
        except SERVICE_ERRORS as e:
            return _error_response(e)

        return Response({'expense': ExpenseSerializer(expense).data})


class ItemExpenseView(APIView):
    """
    The expense recorded for an itinerary item.

    GET: Current expense or null
    PUT: Record who paid (replaces any previous expense of the item)
    DELETE: Clear it
    """

    permission_classes = [CanAccessTripExpenses]

    def get(self, request, trip_id=None, item_id=None):
        try:
            expense = get_item_expense(trip_id=trip_id, item_id=item_id)
        except SERVICE_ERRORS as e:
            return _error_response(e)

        return Response({'expense': ExpenseSerializer(expense).data if expense else None})

    @extend_schema(request=ItemExpenseInputSerializer, responses={200: ExpenseSerializer})
    def put(self, request, trip_id=None, item_id=None):
        serializer = ItemExpenseInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            expense = set_item_expense(
                trip_id=trip_id,
                item_id=item_id,
                payer_id=data['payer_id'],
                amount=data.get('amount'),
                description=data.get('description'),
                splits=data.get('splits'),
            )
        except SERVICE_ERRORS as e:
            return _error_response(e)

        return Response({'expense': ExpenseSerializer(expense).data})

    def delete(self, request, trip_id=None, item_id=None):
        try:
            clear_item_expense(trip_id=trip_id, item_id=item_id)
        except SERVICE_ERRORS as e:
            return _error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    parameters=[
        OpenApiParameter('token', str, description='Share token for read-only access'),
    ],
    responses={200: SettlementReportSerializer},
)
@api_view(['GET'])
@permission_classes([CanAccessTripExpenses])
def trip_settlement(request, trip_id):
    """
    Balances and suggested transfers for a trip.

    GET /api/trips/{trip_id}/settlement/
    """
    try:
        report = get_settlement_report(trip_id=trip_id)
    except SERVICE_ERRORS as e:
        return _error_response(e)

    return Response(SettlementReportSerializer(report).data)
