from django.contrib import admin
from taste.models import TasteSettings, Message

@admin.register(TasteSettings)
class TasteSettingsAdmin(admin.ModelAdmin):
    list_display = ("id", "like_photos_threshold", "updated_at")


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display  = ("id", "channel_name", "channel_message_id", "is_from_recommendation", "sent_date")
    list_filter   = ("channel_name", "is_from_recommendation")
    search_fields = ("channel_message_id", "recommendation_id", "text")
