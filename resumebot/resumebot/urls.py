# resumebot/resumebot/urls.py

"""
Root URL Configuration for the Resumebot Project.

The defined patterns are:
- `/admin/`: Routes to the built-in Django administration site, used to
             inspect users and queued review requests.
- `/discord/`: Delegates the Discord interactions webhook to `discordapp`.
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),

    # A request to `/discord/interactions/` is routed to `discordapp.urls`.
    path('discord/', include('discordapp.urls')),
]
