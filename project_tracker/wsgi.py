"""WSGI entry point; production servers point at `application`."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "project_tracker.settings.prod")

application = get_wsgi_application()
