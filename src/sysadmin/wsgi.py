"""WSGI config for the System Admin console."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "sysadmin.settings")

application = get_wsgi_application()
