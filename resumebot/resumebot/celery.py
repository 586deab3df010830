# resumebot/resumebot/celery.py

"""
Celery Configuration for the Resumebot Project.

This module defines the Celery application used to run best-effort side
effects, such as the ops-channel notification sent after a resume review
request has been queued, outside of the Discord request/response cycle.

When a Celery worker is started, this file is executed to:
1.  Ensure the Django settings are loaded correctly.
2.  Create and configure the Celery app instance.
3.  Automatically discover asynchronous tasks defined in the project's apps.
"""

import os
from celery import Celery

# Must run before the app instance is created so workers share the web
# process's Django configuration.
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'resumebot.settings')

app = Celery('resumebot')

# All Celery settings in settings.py are prefixed with 'CELERY_'.
app.config_from_object('django.conf:settings', namespace='CELERY')

# Picks up discordapp/tasks.py.
app.autodiscover_tasks()
