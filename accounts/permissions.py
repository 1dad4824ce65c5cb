# accounts/permissions.py
from rest_framework.permissions import BasePermission, SAFE_METHODS

# Capacités d'écriture par rôle (une capacité = une famille d'entités)
ROLE_CAPABILITIES = {
    "ADMIN": {"students", "courses", "semesters", "results", "cgpa", "notifications", "reports"},
    "REGISTRAR": {"students", "courses", "semesters", "results", "cgpa", "notifications", "reports"},
    "LECTURER": {"results", "reports"},
    "VIEWER": set(),
}


def user_has_capability(user, capability: str) -> bool:
    if not getattr(user, "is_authenticated", False):
        return False
    if getattr(user, "is_superuser", False):
        return True
    role = getattr(user, "role", None)
    return capability in ROLE_CAPABILITIES.get(role, set())


class HasCapability(BasePermission):
    """
    - Lecture: tout utilisateur authentifié
    - Écriture: rôle qui possède `view.capability`
      (ex: capability = "results" sur ResultViewSet)
    """
    message = "Your role is not allowed to modify these records."

    def has_permission(self, request, view):
        user = request.user
        if not getattr(user, "is_authenticated", False):
            return False

        if request.method in SAFE_METHODS:
            return True

        capability = getattr(view, "capability", None)
        if capability is None:
            return False
        return user_has_capability(user, capability)


class RequiresCapability(HasCapability):
    """Comme HasCapability mais aussi en lecture (ex: GET qui génère un relevé signé)."""

    def has_permission(self, request, view):
        capability = getattr(view, "capability", None)
        return capability is not None and user_has_capability(request.user, capability)
