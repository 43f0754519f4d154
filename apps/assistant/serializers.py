from rest_framework import serializers


class ChatTurnInputSerializer(serializers.Serializer):
    message = serializers.CharField(trim_whitespace=True)
    thread_id = serializers.CharField(required=False, allow_null=True, allow_blank=True)


class ChatTurnOutputSerializer(serializers.Serializer):
    thread_id = serializers.CharField()
    status = serializers.CharField()
    answer = serializers.CharField(allow_blank=True)
    error = serializers.CharField(required=False)
