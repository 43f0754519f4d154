from django.conf import settings

UNKNOWN_LOCATION = "Not set"


def summarize_actions(actions) -> str:
    if not actions:
        return "No previous actions have been recorded."
    lines = [f"- {a.date.strftime(settings.APP_DATE_FORMAT)}: {a.action}" for a in actions]
    return "Previous Actions:\n" + "\n".join(lines)


def build_field_context(field, actions, question: str) -> str:
    """Prompt sent to the field assistant: what we know about the field, then the question."""
    return (
        "Field Information:\n"
        f"- Name: {field.name}\n"
        f"- Crop: {field.crop}\n"
        f"- Location: {field.location_name or UNKNOWN_LOCATION}\n"
        "\n"
        f"{summarize_actions(actions)}\n"
        "\n"
        f"User's Question: {question}"
    )
