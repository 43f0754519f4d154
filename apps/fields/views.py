import logging

from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views import View
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.assistant.apps import get_assistant_config
from apps.assistant.exceptions import ChatTurnFailed
from apps.assistant.logic import api_services
from apps.assistant.logic.conversation import handle_chat_turn
from apps.assistant.views import chat_turn_error_response, chat_turn_response, parse_json_body

from .logic.prompts import build_field_context
from .models import ChatMessage, Field
from .serializers import (
    ChatMessageSerializer,
    FieldActionSerializer,
    FieldChatInputSerializer,
    FieldSerializer,
    FieldUpdateSerializer,
)

logger = logging.getLogger(__name__)


class FieldListView(APIView):
    def get(self, request, *args, **kwargs):
        fields = Field.objects.all()
        return Response(FieldSerializer(fields, many=True).data)

    def post(self, request, *args, **kwargs):
        serializer = FieldSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"error": "name and crop are required"}, status=status.HTTP_400_BAD_REQUEST)
        field = serializer.save()
        logger.info("Created field %s", field.id)
        return Response(FieldSerializer(field).data, status=status.HTTP_201_CREATED)


class FieldDetailView(APIView):
    def put(self, request, field_id, *args, **kwargs):
        field = Field.objects.filter(pk=field_id).first()
        if field is None:
            return Response({"error": "Field not found"}, status=status.HTTP_404_NOT_FOUND)

        serializer = FieldUpdateSerializer(field, data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        field = serializer.save()
        return Response(FieldSerializer(field).data, status=status.HTTP_200_OK)

    def delete(self, request, field_id, *args, **kwargs):
        deleted, _ = Field.objects.filter(pk=field_id).delete()
        if not deleted:
            return Response({"error": "Field not found"}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)


class FieldActionListView(APIView):
    """Dated actions (sowing, spraying, ...) recorded against a field, newest first."""

    def get(self, request, field_id, *args, **kwargs):
        field = get_object_or_404(Field, pk=field_id)
        return Response(FieldActionSerializer(field.actions.all(), many=True).data)

    def post(self, request, field_id, *args, **kwargs):
        field = get_object_or_404(Field, pk=field_id)
        serializer = FieldActionSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"error": "Missing action or date"}, status=status.HTTP_400_BAD_REQUEST)
        action = serializer.save(field=field)
        return Response(FieldActionSerializer(action).data, status=status.HTTP_201_CREATED)


class FieldMessageListView(APIView):
    def get(self, request, field_id, *args, **kwargs):
        field = get_object_or_404(Field, pk=field_id)
        return Response(ChatMessageSerializer(field.messages.all(), many=True).data)

    def post(self, request, field_id, *args, **kwargs):
        field = get_object_or_404(Field, pk=field_id)
        serializer = ChatMessageSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"error": "role and content are required"}, status=status.HTTP_400_BAD_REQUEST)
        message = serializer.save(field=field)
        return Response(ChatMessageSerializer(message).data, status=status.HTTP_201_CREATED)


async def remember_thread(field, thread_id):
    """Store the thread on the field unless it already has one."""
    if field.thread_id or not thread_id:
        return
    await Field.objects.filter(pk=field.pk, thread_id__isnull=True).aupdate(thread_id=thread_id)
    field.thread_id = thread_id


class FieldChatView(View):
    """
    Ask the field assistant a question about one field.

    The question is wrapped with the field's details and recorded actions,
    both sides of the exchange are saved to the field's chat history, and
    the field keeps the conversation thread for later turns.
    """

    http_method_names = ["post"]

    async def post(self, request, field_id, *args, **kwargs):
        body = parse_json_body(request)
        serializer = FieldChatInputSerializer(data=body or {})
        if not serializer.is_valid():
            return JsonResponse({"error": "message is required"}, status=400)
        question = serializer.validated_data["message"]

        try:
            field = await Field.objects.aget(pk=field_id)
        except Field.DoesNotExist:
            return JsonResponse({"error": "Field not found"}, status=404)

        actions = [action async for action in field.actions.all()]
        prompt = build_field_context(field, actions, question)
        await ChatMessage.objects.acreate(field=field, role=ChatMessage.Role.USER, content=question)

        config = get_assistant_config()
        try:
            async with api_services.build_client(config) as client:
                result = await handle_chat_turn(config, field.thread_id, prompt, client=client)
        except ChatTurnFailed as e:
            await remember_thread(field, e.thread_id)
            return chat_turn_error_response(e)
        except Exception as e:
            return chat_turn_error_response(e)

        await remember_thread(field, result.thread_id)
        if result.completed:
            await ChatMessage.objects.acreate(field=field, role=ChatMessage.Role.ASSISTANT, content=result.answer)
        return chat_turn_response(result)
