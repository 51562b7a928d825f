# =============================================================================
# agents/prompts/moderation.py - Content Moderation Prompt
# =============================================================================

from __future__ import annotations

# Longer content is cut before it is sent to the model
MAX_MODERATION_CHARS = 12000


MODERATION_SYSTEM_PROMPT = """
You are a content moderation AI trained to detect harmful, illegal, or policy-violating content.
Only flag content that clearly violates policies. Be careful not to over-moderate legitimate content.
""".strip()


def build_moderation_prompt(content: str, content_type: str) -> str:
    truncated = content[:MAX_MODERATION_CHARS]

    return f"""
Analyze the following {content_type} for violations of US laws or platform policies, including:
- Hate speech or discrimination based on protected characteristics
- Threats of violence or harm
- Illegal activity solicitation (drugs, weapons, human trafficking, etc.)
- Child exploitation or endangerment
- Explicit pornographic content
- Significant copyright infringement
- Personal information sharing (doxxing)
- Extreme harassment or bullying
- Terrorist content or violent extremism promotion

CONTENT TO ANALYZE:
'''
{truncated}
'''

Based on an objective analysis, determine if this content should be blocked or allowed.
Return a JSON response with the following structure:
{{
  "is_allowed": boolean,
  "score": number,
  "category": string | null,
  "reason": string | null
}}

- is_allowed: false if the content violates policies, true if it's acceptable
- score: 0-100 severity score, higher means more concerning
- category: if not allowed, the category of violation (hate_speech, illegal_activity, violence, etc.)
- reason: brief explanation of why content was rejected, or null if allowed
""".strip()
