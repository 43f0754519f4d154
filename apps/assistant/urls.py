from django.urls import path

from .views import ChatTurnView

urlpatterns = [
    path("chat-turn", ChatTurnView.as_view(), name="chat-turn"),
    path("api/chat", ChatTurnView.as_view(), name="api-chat"),
]
