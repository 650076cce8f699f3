# backend/prompt_builder.py

from typing import Optional

HEADSHOT_TEMPLATE = "\n".join([
    "Transform the provided image into a professional, studio-quality headshot.",
    "The final image must be well-lit with soft, even lighting, suitable for a corporate or business profile like LinkedIn.",
    "The background must be a neutral, blurred background (like a solid light gray, or a soft office blur).",
    "The person's facial details must be sharp and in focus.",
    "The person should be centered, looking at the camera with a natural, confident expression.",
    "The final image must be highly realistic, resembling a photograph taken with a high-end DSLR camera.",
    "Strictly do not include any text, watermarks, or logos.",
])

INSTRUCTIONS_PREFIX = "Incorporate these user instructions:"


def build_headshot_prompt(instructions: Optional[str] = None) -> str:
    """
    Build the prompt sent alongside the source photo:
    - fixed studio-headshot template
    - plus the user's instructions, quoted verbatim, when there are any
    """
    if instructions and instructions.strip():
        return f'{HEADSHOT_TEMPLATE}\n{INSTRUCTIONS_PREFIX} "{instructions}"'
    return HEADSHOT_TEMPLATE
