from django.urls import path

from .views import FieldActionListView, FieldChatView, FieldDetailView, FieldListView, FieldMessageListView

urlpatterns = [
    path("api/fields", FieldListView.as_view(), name="field-list"),
    path("api/fields/<uuid:field_id>", FieldDetailView.as_view(), name="field-detail"),
    path("api/fields/<uuid:field_id>/actions", FieldActionListView.as_view(), name="field-actions"),
    path("api/fields/<uuid:field_id>/messages", FieldMessageListView.as_view(), name="field-messages"),
    path("api/fields/<uuid:field_id>/chat", FieldChatView.as_view(), name="field-chat"),
]
