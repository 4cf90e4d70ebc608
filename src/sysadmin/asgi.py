"""ASGI config for the System Admin console."""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "sysadmin.settings")

application = get_asgi_application()
