from django.apps import AppConfig
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

EMAIL_MODES = ("modal", "option")


class DiscordappConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'discordapp'
    verbose_name = 'Discord Resume Review'

    def ready(self):
        if settings.RESUME_REVIEW_EMAIL_MODE not in EMAIL_MODES:
            raise ImproperlyConfigured(
                f"RESUME_REVIEW_EMAIL_MODE must be one of {EMAIL_MODES}, "
                f"got {settings.RESUME_REVIEW_EMAIL_MODE!r}."
            )
