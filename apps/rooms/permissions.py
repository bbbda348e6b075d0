from rest_framework import permissions


class IsRoommate(permissions.BasePermission):
    """
    Permission: User must be an approved roommate of the room.
    """

    def has_object_permission(self, request, view, obj):
        # obj is a Room instance
        return obj.has_roommate(request.user)


class IsRoomOwner(permissions.BasePermission):
    """
    Permission: User must be the room owner.
    """

    message = 'Only the room owner can perform this action.'

    def has_object_permission(self, request, view, obj):
        # obj is a Room instance
        return obj.is_owner(request.user)
