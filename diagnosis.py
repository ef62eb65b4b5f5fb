from gemini_client import GeminiClient
from errors import RemoteError
from image_ingestion import EncodedImage

VISION_PROMPT = (
    "Analyze this image of a farm field or plant. Describe any visible damage, "
    "disease, pest infestation, or nutrient deficiency. Be specific about the "
    "visual symptoms and potential causes."
)


def build_vision_parts(image: EncodedImage):
    return [
        {"text": VISION_PROMPT},
        {
            "inlineData": {
                "mimeType": image.content_type,
                "data": image.base64_data,
            }
        },
    ]


async def diagnose(image: EncodedImage, client: GeminiClient) -> str:
    """Décrit le problème visible sur l'image (appel vision)."""
    try:
        return await client.generate(build_vision_parts(image))
    except RemoteError as e:
        raise e.add_context("Failed to analyze image")
