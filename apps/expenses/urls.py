from django.urls import path
from . import views

app_name = 'expenses'

expense_list = views.ExpenseViewSet.as_view({'get': 'list', 'post': 'create'})
expense_detail = views.ExpenseViewSet.as_view({
    'get': 'retrieve',
    'put': 'update',
    'patch': 'partial_update',
    'delete': 'destroy',
})
expense_splits = views.ExpenseViewSet.as_view({'put': 'splits'})

urlpatterns = [
    # GET    /api/trips/{trip_id}/expenses/                  - List expenses
    # POST   /api/trips/{trip_id}/expenses/                  - Create expense
    # GET    /api/trips/{trip_id}/expenses/{id}/             - Expense detail
    # PUT    /api/trips/{trip_id}/expenses/{id}/             - Update expense
    # PATCH  /api/trips/{trip_id}/expenses/{id}/             - Partial update
    # DELETE /api/trips/{trip_id}/expenses/{id}/             - Delete expense
    # PUT    /api/trips/{trip_id}/expenses/{id}/splits/      - Replace splits
    path('<uuid:trip_id>/expenses/', expense_list, name='expense-list'),
    path('<uuid:trip_id>/expenses/<uuid:pk>/', expense_detail, name='expense-detail'),
    path('<uuid:trip_id>/expenses/<uuid:pk>/splits/', expense_splits, name='expense-splits'),

    # GET    /api/trips/{trip_id}/items/{item_id}/expense/   - Item expense
    # PUT    /api/trips/{trip_id}/items/{item_id}/expense/   - Set item expense
    # DELETE /api/trips/{trip_id}/items/{item_id}/expense/   - Clear item expense
    path('<uuid:trip_id>/items/<uuid:item_id>/expense/', views.ItemExpenseView.as_view(), name='item-expense'),

    # GET    /api/trips/{trip_id}/settlement/                - Settlement report
    path('<uuid:trip_id>/settlement/', views.trip_settlement, name='settlement'),
]
