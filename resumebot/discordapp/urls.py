# resumebot/discordapp/urls.py

"""
URL Configuration for the Discord App Integration.

Discord delivers every interaction (PING, slash commands, modal submissions)
as a signed JSON POST to the single "Interactions Endpoint URL" configured in
the developer portal.
"""

from django.urls import path
from . import views

# Example: reverse('discordapp:interactions')
app_name = 'discordapp'

urlpatterns = [
    path("interactions/", views.interactions, name="interactions"),
]
