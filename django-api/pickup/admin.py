from django.contrib import admin

from pickup.models import ActivityLog, GameSession, Member, Notification


class NotificationInline(admin.TabularInline):
    model = Notification
    extra = 0


@admin.register(Member)
class MemberAdmin(admin.ModelAdmin):
    list_display = ["full_name", "nickname", "role", "gender", "games_attended", "games_missed"]
    list_filter = ["role", "gender"]
    search_fields = ["full_name", "nickname"]
    inlines = [NotificationInline]


@admin.register(GameSession)
class GameSessionAdmin(admin.ModelAdmin):
    list_display = ["name", "date", "start_time", "type", "status", "max_spots"]
    list_filter = ["status", "type", "gender_restriction"]
    search_fields = ["name"]


@admin.register(ActivityLog)
class ActivityLogAdmin(admin.ModelAdmin):
    list_display = ["action", "details", "author_name", "timestamp"]
    list_filter = ["action"]
