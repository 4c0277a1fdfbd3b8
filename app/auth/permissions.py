"""
Central registry of allowed actions per role.
"""
ROLE_SCOPES = {
    "customer": {"place_order", "view_own_orders", "update_profile"},
    "admin":    {"*"},
}

def role_has_scope(role: str, action: str) -> bool:
    scopes = ROLE_SCOPES.get(role, set())
    return "*" in scopes or action in scopes
