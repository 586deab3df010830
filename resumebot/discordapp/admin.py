# resumebot/discordapp/admin.py

"""
Admin Panel Configuration for the Discord Resume Review App.

Gives operators a view of who has used their review quota and what is sitting
in the review queue. Rows are created by the bot and advanced by the analysis
worker, so most fields are read-only here.
"""

# Django imports
from django.contrib import admin
from django.db.models import Count

# Local application imports
from .models import ResumeReviewRequest, User
from .validators import format_size_mb


class ResumeReviewRequestInline(admin.TabularInline):
    model = ResumeReviewRequest
    extra = 0
    can_delete = False
    fields = ('attachment_filename', 'email', 'status', 'created_at')
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    """
    Admin configuration for the User model.

    `resume_review_count` stays editable so an operator can reset a user's
    quota by hand.
    """
    list_display = ('display_name', 'discord_user_id', 'email', 'resume_review_count', 'request_total', 'last_request_at')
    search_fields = ('display_name', 'discord_user_id', 'email')
    readonly_fields = ('created_at', 'updated_at', 'last_request_at')
    inlines = [ResumeReviewRequestInline]

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(_request_total=Count('review_requests'))

    def request_total(self, obj: User) -> int:
        """Counts queued request rows, which can differ from the quota counter after a reset."""
        return obj._request_total
    request_total.short_description = 'Requests'
    request_total.admin_order_field = '_request_total'


@admin.register(ResumeReviewRequest)
class ResumeReviewRequestAdmin(admin.ModelAdmin):
    """Admin configuration for the review queue."""
    list_display = ('id', 'attachment_filename', 'discord_username', 'email', 'size_mb', 'status', 'created_at')
    list_filter = ('status', 'created_at')
    search_fields = ('attachment_filename', 'discord_username', 'discord_user_id', 'email')
    readonly_fields = (
        'email', 'discord_user_id', 'discord_username', 'user',
        'attachment_url', 'attachment_filename', 'attachment_content_type', 'attachment_size',
        'created_at', 'updated_at',
    )
    date_hierarchy = 'created_at'

    def size_mb(self, obj: ResumeReviewRequest) -> str:
        return f"{format_size_mb(obj.attachment_size)} MB"
    size_mb.short_description = 'Size'
