from rest_framework import permissions


class IsStoreAdmin(permissions.BasePermission):
    """Staff users manage coupons, settings, orders and merchandising"""

    message = 'Store administrator access required.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_staff)


class ReadOnlyOrStoreAdmin(IsStoreAdmin):
    """Anyone may read; only store administrators may write"""

    def has_permission(self, request, view):
        if request.method in permissions.SAFE_METHODS:
            return True
        return super().has_permission(request, view)
