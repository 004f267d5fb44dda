"""
Prompt templates for message translation.
"""

TRANSLATION_PROMPT_TEMPLATE = """
You are a translator. Output ONLY JSON in the following format:

{{
  "original_message": string,
  "translated_message": string,
  "detected_language": string
}}

Translate the following message into {target_language}:

"{message}"

Do NOT include any extra text, commentary, markdown, or backticks.
"""


def build_translation_prompt(message: str, target_language: str) -> str:
    """
    Build the translation prompt.

    Both arguments must already be sanitized; they are embedded verbatim.
    """
    return TRANSLATION_PROMPT_TEMPLATE.format(message=message, target_language=target_language)
