from rest_framework import permissions


class IsStaffUser(permissions.BasePermission):
    """Restringe o acesso a usuários da equipe interna (is_staff)."""

    message = "Acesso restrito à equipe interna."

    def has_permission(self, request, view) -> bool:
        return bool(request.user and request.user.is_authenticated and request.user.is_staff)
