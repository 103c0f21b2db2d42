import anthropic

from config.settings import ANTHROPIC_API_KEY, CHAT_MODEL

SYSTEM_PROMPT = """You are FemCare, a friendly reproductive-health companion.
Keep it warm and practical, not clinical.
Give short, concrete self-care tips, never a diagnosis.
If something sounds serious (severe pain, very heavy bleeding, missed periods), suggest seeing a doctor.
Use at most 2 emojis. Keep your response to 3-4 sentences."""

_client: anthropic.AsyncAnthropic | None = None


def tips_enabled() -> bool:
    return bool(ANTHROPIC_API_KEY)


def get_client() -> anthropic.AsyncAnthropic:
    global _client
    if _client is None:
        _client = anthropic.AsyncAnthropic(api_key=ANTHROPIC_API_KEY, max_retries=3)
    return _client


def _format_symptoms_context(recent_symptoms: list[str] | None) -> str:
    if not recent_symptoms:
        return ""
    return "\n\nRecently logged symptoms: " + ", ".join(recent_symptoms[:5])


def _extract_text(response) -> str:
    if response.content:
        return response.content[0].text
    return "I couldn't come up with a tip just now. Please try again in a moment."


async def generate_tip(
    phase: str,
    cycle_day: int,
    recent_symptoms: list[str] | None = None,
    model: str = CHAT_MODEL,
) -> str:
    """Generate a short self-care tip for the current cycle phase."""
    user_msg = (
        f'It\'s day {cycle_day} of the menstrual cycle and the current phase is "{phase}".'
        f"{_format_symptoms_context(recent_symptoms)}\n\n"
        "Give one short, encouraging self-care tip."
    )
    response = await get_client().messages.create(
        model=model,
        max_tokens=300,
        system=SYSTEM_PROMPT,
        messages=[{"role": "user", "content": user_msg}],
    )
    return _extract_text(response)
