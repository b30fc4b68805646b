# taste/models/message.py
from django.db import models


class Message(models.Model):
    channel_name = models.CharField(max_length=64)
    channel_message_id = models.CharField(max_length=128)
    recommendation_id = models.CharField(max_length=128, blank=True, default="")  # match del canal
    sender_id = models.CharField(max_length=128, blank=True, default="")
    is_from_recommendation = models.BooleanField(default=False)
    text = models.TextField(blank=True, default="")
    sent_date = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "taste_message"
        unique_together = ("channel_name", "channel_message_id")
        indexes = [models.Index(fields=["channel_name", "sent_date"], name="taste_msg_channel_sent_idx")]

    def __str__(self):
        return f"{self.channel_name}:{self.channel_message_id}"
