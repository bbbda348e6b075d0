from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'rooms'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.RoomViewSet, basename='room')

urlpatterns = [
    # Room ViewSet routes
    # GET    /api/rooms/              - List user's rooms
    # POST   /api/rooms/              - Create room
    # GET    /api/rooms/{id}/         - Get room details
    # PATCH  /api/rooms/{id}/         - Update room (owner)
    # DELETE /api/rooms/{id}/         - Delete room (owner)

    # Invite flow
    # GET    /api/rooms/lookup/?invite_code=  - Preview room by code
    # POST   /api/rooms/join/                 - Request to join by code

    # Custom room actions
    # GET    /api/rooms/{id}/roommates/          - Approved roommates
    # GET    /api/rooms/{id}/pending/            - Pending requests (owner)
    # POST   /api/rooms/{id}/approve/            - Approve request (owner)
    # POST   /api/rooms/{id}/decline/            - Decline request (owner)
    # DELETE /api/rooms/{id}/remove_roommate/    - Remove roommate (owner)
    # POST   /api/rooms/{id}/leave/              - Leave room
    # POST   /api/rooms/{id}/regenerate_invite/  - Regenerate invite code (owner)
    # GET    /api/rooms/{id}/balances/           - Who owes whom

    path('', include(router.urls)),
]
