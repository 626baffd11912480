from accessgate_core.session.cache import GrantedPermissionCache

__all__ = ["GrantedPermissionCache"]
