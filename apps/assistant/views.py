import logging

from django.http import JsonResponse
from django.views import View
from rest_framework.exceptions import ParseError
from rest_framework.parsers import JSONParser

from .apps import get_assistant_config
from .exceptions import ChatTurnFailed, InvalidRequest, UpstreamUnavailable
from .logic import api_services
from .logic.conversation import handle_chat_turn
from .serializers import ChatTurnInputSerializer, ChatTurnOutputSerializer

logger = logging.getLogger(__name__)

GENERIC_ERROR = "An internal server error occurred"


def parse_json_body(request):
    """Decode a strict JSON object body; returns None when the body is not one."""
    parser = JSONParser()
    if request.content_type != parser.media_type:
        return None
    try:
        body = parser.parse(request)
    except ParseError:
        return None
    return body if isinstance(body, dict) else None


def chat_turn_response(result):
    output = ChatTurnOutputSerializer(result.as_payload())
    return JsonResponse(output.data, status=200 if result.completed else 502)


def chat_turn_error_response(e):
    """Map a failed chat turn to a 500 that keeps the thread id but hides upstream detail."""
    cause = e.cause if isinstance(e, ChatTurnFailed) else e
    if isinstance(cause, UpstreamUnavailable):
        logger.error("Assistant service unavailable: %s", cause, exc_info=cause)
    else:
        logger.error("An error occurred in the chat handler: %r", cause, exc_info=cause)

    payload = {"error": GENERIC_ERROR}
    if isinstance(e, ChatTurnFailed):
        payload["thread_id"] = e.thread_id
    return JsonResponse(payload, status=500)


class ChatTurnView(View):
    """
    Submit one message to the chat assistant and wait for its reply.
    Omitting ``thread_id`` starts a new conversation thread.
    """

    http_method_names = ["post"]

    async def post(self, request, *args, **kwargs):
        body = parse_json_body(request)
        if body is None:
            return JsonResponse({"error": "Request body must be a JSON object"}, status=400)

        serializer = ChatTurnInputSerializer(data=body)
        if not serializer.is_valid():
            return JsonResponse({"error": "message is required"}, status=400)

        data = serializer.validated_data
        config = get_assistant_config()
        try:
            async with api_services.build_client(config) as client:
                result = await handle_chat_turn(config, data.get("thread_id") or None, data["message"], client=client)
        except InvalidRequest as e:
            return JsonResponse({"error": str(e)}, status=400)
        except Exception as e:
            return chat_turn_error_response(e)

        return chat_turn_response(result)
