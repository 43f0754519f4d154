from django.http import JsonResponse
from django.urls import include, path


def healthz(request):
    return JsonResponse({"status": "ok"})


urlpatterns = [
    path("healthz", healthz, name="healthz"),
    path("", include("apps.assistant.urls")),
    path("", include("apps.fields.urls")),
    path("", include("apps.goals.urls")),
    path("", include("apps.posts.urls")),
]
