from django.urls import path
from . import views

app_name = 'trips'

member_list = views.TripMemberViewSet.as_view({'get': 'list', 'post': 'create'})
member_detail = views.TripMemberViewSet.as_view({'delete': 'destroy'})

urlpatterns = [
    # GET    /api/trips/{trip_id}/members/              - List members
    # POST   /api/trips/{trip_id}/members/              - Add member (owner)
    # DELETE /api/trips/{trip_id}/members/{member_id}/  - Remove member (owner)
    path('<uuid:trip_id>/members/', member_list, name='member-list'),
    path('<uuid:trip_id>/members/<uuid:pk>/', member_detail, name='member-detail'),
]
