from rest_framework import serializers
from taste.models import TasteSettings, Message


class PhotoSerializer(serializers.Serializer):
    url = serializers.CharField()
    similarity = serializers.FloatField(required=False, allow_null=True)
    similarity_date = serializers.CharField(required=False, allow_null=True, allow_blank=True)

    def to_internal_value(self, data):
        validated = super().to_internal_value(data)
        # el resto de campos de la foto (id, processedFiles, ...) viaja tal cual
        extra = {k: v for k, v in data.items() if k not in self.fields}
        return {**extra, **validated}


class CheckOutSerializer(serializers.Serializer):
    channel = serializers.CharField()
    photos = PhotoSerializer(many=True, allow_empty=True)


class SnapshotSerializer(serializers.Serializer):
    channel = serializers.CharField()
    photo = PhotoSerializer()


class AcquireTasteSerializer(serializers.Serializer):
    photos = PhotoSerializer(many=True, allow_empty=True)


class TasteSettingsSerializer(serializers.ModelSerializer):
    class Meta:
        model = TasteSettings
        fields = ["id", "like_photos_threshold", "updated_at"]
        read_only_fields = ["id", "updated_at"]


class MessageSerializer(serializers.ModelSerializer):
    # sin UniqueTogetherValidator: el upsert resuelve duplicados
    class Meta:
        model = Message
        fields = [
            "channel_name", "channel_message_id", "recommendation_id", "sender_id",
            "is_from_recommendation", "text", "sent_date",
        ]
        validators = []


class ReadMessagesSerializer(serializers.Serializer):
    messages = MessageSerializer(many=True, allow_empty=True)
