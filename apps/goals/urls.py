from django.urls import path

from .views import GoalsView

urlpatterns = [
    path("api/goals", GoalsView.as_view(), name="goals"),
]
