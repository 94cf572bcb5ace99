from openai import OpenAI, OpenAIError

from config import LLMSettings, get_llm_settings
from errors import GenerationParseError, GenerationUnavailable


def get_openai_client(settings: LLMSettings) -> OpenAI:
    if not settings.api_key:
        raise GenerationUnavailable("OPENAI_API_KEY not set in environment")
    return OpenAI(api_key=settings.api_key)


def call_openai(policy: str, data: str, settings: LLMSettings | None = None) -> str:
    """
    Single chat completion returning the raw JSON text of a plan.
    No retries: a failed call fails the request.
    """
    settings = settings or get_llm_settings()
    client = get_openai_client(settings)

    try:
        response = client.chat.completions.create(
            model=settings.model,
            max_tokens=settings.max_tokens,
            temperature=settings.temperature,
            response_format={"type": "json_object"},
            messages=[
                {"role": "system", "content": policy},
                {"role": "user", "content": data},
            ],
        )
    except OpenAIError as exc:
        raise GenerationUnavailable(f"Plan generation request failed: {exc}") from exc

    if not response.choices:
        raise GenerationParseError("Model returned no choices.")
    raw = (response.choices[0].message.content or "").strip()
    if not raw:
        raise GenerationParseError("Model returned an empty response.")
    return raw
