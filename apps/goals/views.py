import logging

from asgiref.sync import sync_to_async
from django.db import transaction
from django.http import JsonResponse
from django.views import View

from apps.assistant.apps import get_assistant_config
from apps.assistant.logic.conversation import get_assistant_response
from apps.assistant.views import parse_json_body

from .logic.checklist import checklist_prompt, parse_checklist
from .models import ChecklistItem, Goal
from .serializers import ChecklistItemWithGoalSerializer, ChecklistToggleSerializer, GoalCreateSerializer, GoalSerializer

logger = logging.getLogger(__name__)


def list_goals():
    return GoalSerializer(Goal.objects.prefetch_related("checklist"), many=True).data


@transaction.atomic
def save_generated_goal(title, entries):
    goal = Goal.objects.create(title=title, is_generating=False, is_generated=True, color="blue")
    ChecklistItem.objects.bulk_create(
        [ChecklistItem(goal=goal, text=e.text, priority=e.priority, completed=e.completed) for e in entries]
    )
    return GoalSerializer(Goal.objects.prefetch_related("checklist").get(pk=goal.pk)).data


def toggle_checklist_item(item_id, completed):
    """Set an item's completion flag. Returns the item with its goal, or None if it does not exist."""
    if not ChecklistItem.objects.filter(pk=item_id).update(completed=completed):
        return None
    item = ChecklistItem.objects.select_related("goal").prefetch_related("goal__checklist").get(pk=item_id)
    return ChecklistItemWithGoalSerializer(item).data


class GoalsView(View):
    """
    Goals and their checklists.

    POST asks the goal-planner assistant for a checklist and stores the goal
    only if the reply holds a well-formed one. PATCH toggles one checklist
    item.
    """

    http_method_names = ["get", "post", "patch"]

    async def get(self, request, *args, **kwargs):
        goals = await sync_to_async(list_goals)()
        return JsonResponse(goals, safe=False)

    async def post(self, request, *args, **kwargs):
        serializer = GoalCreateSerializer(data=parse_json_body(request) or {})
        if not serializer.is_valid():
            return JsonResponse({"error": "Title is required"}, status=400)
        title = serializer.validated_data["title"]

        config = get_assistant_config()
        raw = await get_assistant_response(config, checklist_prompt(title), config.goal_assistant_id)
        if not raw:
            return JsonResponse({"error": "No response from assistant"}, status=500)

        entries = parse_checklist(raw)
        if entries is None:
            return JsonResponse({"error": "Invalid checklist format"}, status=400)

        goal = await sync_to_async(save_generated_goal)(title, entries)
        logger.info("Created goal %s with %d checklist items", goal["id"], len(entries))
        return JsonResponse(goal)

    async def patch(self, request, *args, **kwargs):
        serializer = ChecklistToggleSerializer(data=parse_json_body(request) or {})
        if not serializer.is_valid():
            return JsonResponse({"error": "id and completed are required"}, status=400)

        data = serializer.validated_data
        item = await sync_to_async(toggle_checklist_item)(data["id"], data["completed"])
        if item is None:
            return JsonResponse({"error": "Checklist item not found"}, status=404)
        return JsonResponse(item)
