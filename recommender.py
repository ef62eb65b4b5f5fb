from gemini_client import GeminiClient
from errors import RemoteError

REMEDY_PROMPT = (
    'Based on the following plant/field problem: "{problem}", suggest specific '
    "types of fertilizers, pesticides, or other remedies that could cure this "
    "damage. Also, mention any general advice for prevention or management. "
    "Provide a concise list of recommendations."
)


def build_remedy_prompt(diagnosis_text: str) -> str:
    # replace() plutôt que format() : le diagnostic peut contenir des accolades
    return REMEDY_PROMPT.replace("{problem}", diagnosis_text)


async def suggest_remedies(diagnosis_text: str, client: GeminiClient) -> str:
    """Propose engrais, pesticides et conseils de prévention pour un diagnostic."""
    try:
        return await client.generate([{"text": build_remedy_prompt(diagnosis_text)}])
    except RemoteError as e:
        raise e.add_context("Failed to get solutions")
