import re
from typing import Any, Dict, List

from service import ScanSession

BULLET_SPLIT = re.compile(r"[\n•-]")

WHERE_TO_BUY = (
    "For nearby locations to purchase the recommended fertilizers or pesticides, "
    "please search online using the product names (e.g., \"Buy [Product Name] near me\") "
    "or consult your local agricultural supply stores."
)


def split_bullets(text: str) -> List[str]:
    """Découpe un texte en éléments de liste (retours à la ligne, puces, tirets)."""
    if not text:
        return []
    return [segment.strip() for segment in BULLET_SPLIT.split(text) if segment.strip()]


def render_context(session: ScanSession) -> Dict[str, Any]:
    has_results = bool(session.diagnosis or session.solutions)
    return {
        "preview_url": session.image.data_url if session.image else None,
        "filename": session.image.filename if session.image else None,
        "loading": session.in_flight,
        "scan_disabled": session.in_flight or session.image is None,
        "error": session.error,
        "show_results": has_results and not session.in_flight,
        "diagnosis_items": split_bullets(session.diagnosis),
        "solution_items": split_bullets(session.solutions),
        "where_to_buy": WHERE_TO_BUY,
    }
