from rest_framework.permissions import SAFE_METHODS, BasePermission


class IsAdminRole(BasePermission):
    """Store admins - role on the user, not django's is_staff."""

    message = 'Not authorized as an admin'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and getattr(user, 'role', None) == 'admin')


class IsAdminRoleOrReadOnly(IsAdminRole):
    """Anyone can read, only store admins write."""

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return super().has_permission(request, view)
