# 📄 File: appserver/shared/config/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Contains the settings that tell the application server how to connect to its
# database and how to behave in each environment.
#
# 🧪 Purpose (Technical Summary):
# Configuration package initialization with exports for settings management.
#
# 🔄 Connected Modules / Calls From:
# - appserver.main (application startup)
# - Infrastructure components

from .settings import get_settings, Settings

__all__ = [
    "get_settings",
    "Settings",
]
