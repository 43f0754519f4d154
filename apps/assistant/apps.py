from django.apps import AppConfig, apps


class AssistantAppConfig(AppConfig):
    name = "apps.assistant"
    label = "assistant"

    assistant_config = None

    def ready(self):
        from .config import AssistantConfig

        # Fail at boot rather than on the first chat request.
        self.assistant_config = AssistantConfig.from_settings()


def get_assistant_config():
    return apps.get_app_config("assistant").assistant_config
