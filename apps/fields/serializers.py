from rest_framework import serializers

from .models import ChatMessage, Field, FieldAction


class FieldSerializer(serializers.ModelSerializer):
    locationName = serializers.CharField(source="location_name", read_only=True)
    threadId = serializers.CharField(source="thread_id", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Field
        fields = ["id", "name", "crop", "latitude", "longitude", "locationName", "threadId", "createdAt"]
        read_only_fields = ["id", "latitude", "longitude"]


class FieldUpdateSerializer(serializers.Serializer):
    """Body of ``PUT /api/fields/<id>``: location pin and/or the assistant thread."""

    latLng = serializers.ListField(child=serializers.FloatField(), required=False, allow_null=True)
    locationName = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    threadId = serializers.CharField(required=False, allow_null=True, allow_blank=True)

    def validate_threadId(self, value):
        current = self.instance.thread_id if self.instance else None
        if value and current and value != current:
            raise serializers.ValidationError("threadId cannot be changed once assigned.")
        return value

    def update(self, instance, validated_data):
        lat_lng = validated_data.get("latLng")
        if isinstance(lat_lng, list) and len(lat_lng) == 2:
            instance.latitude, instance.longitude = lat_lng
        if "locationName" in validated_data:
            instance.location_name = validated_data["locationName"]
        if validated_data.get("threadId"):
            instance.thread_id = validated_data["threadId"]
        instance.save()
        return instance


class FieldActionSerializer(serializers.ModelSerializer):
    fieldId = serializers.UUIDField(source="field_id", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = FieldAction
        fields = ["id", "fieldId", "action", "date", "createdAt"]


class ChatMessageSerializer(serializers.ModelSerializer):
    fieldId = serializers.UUIDField(source="field_id", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = ChatMessage
        fields = ["id", "fieldId", "role", "content", "createdAt"]


class FieldChatInputSerializer(serializers.Serializer):
    message = serializers.CharField(trim_whitespace=True)
