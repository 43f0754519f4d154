import uuid

from django.db import models


class Goal(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=500)
    is_generating = models.BooleanField(default=False)
    is_generated = models.BooleanField(default=False)
    color = models.CharField(max_length=32, default="blue")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return self.title


class ChecklistItem(models.Model):
    class Priority(models.TextChoices):
        LOW = "low"
        MEDIUM = "medium"
        HIGH = "high"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    goal = models.ForeignKey(Goal, on_delete=models.CASCADE, related_name="checklist")
    text = models.TextField()
    completed = models.BooleanField(default=False)
    priority = models.CharField(max_length=16, choices=Priority.choices, default=Priority.MEDIUM)

    def __str__(self):
        return self.text
