from rest_framework import serializers

from .models import ChecklistItem, Goal


class ChecklistItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = ChecklistItem
        fields = ["id", "text", "completed", "priority"]


class GoalSerializer(serializers.ModelSerializer):
    isGenerating = serializers.BooleanField(source="is_generating", read_only=True)
    isGenerated = serializers.BooleanField(source="is_generated", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    checklist = ChecklistItemSerializer(many=True, read_only=True)

    class Meta:
        model = Goal
        fields = ["id", "title", "isGenerating", "isGenerated", "checklist", "color", "createdAt"]


class ChecklistItemWithGoalSerializer(ChecklistItemSerializer):
    goal = GoalSerializer(read_only=True)

    class Meta(ChecklistItemSerializer.Meta):
        fields = ChecklistItemSerializer.Meta.fields + ["goal"]


class GoalCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=500)


class ChecklistToggleSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    completed = serializers.BooleanField()
