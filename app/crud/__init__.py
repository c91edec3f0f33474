from .registration import registration
from .admin_user import admin_user
from .admin_log import admin_log

__all__ = ["registration", "admin_user", "admin_log"]
