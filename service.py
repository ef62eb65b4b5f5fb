import enum
import logging
from dataclasses import dataclass
from typing import Optional

from diagnosis import diagnose
from errors import NoImageSelectedError, RemoteError, ScanInProgressError, ValidationError
from gemini_client import GeminiClient
from image_ingestion import EncodedImage
from recommender import suggest_remedies

logger = logging.getLogger("farm-scanner.service")


class RequestState(enum.Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"


@dataclass
class ScanSession:
    """État transitoire d'une session : image, résultats, erreur, état."""

    image: Optional[EncodedImage] = None
    diagnosis: str = ""
    solutions: str = ""
    state: RequestState = RequestState.IDLE
    error: Optional[str] = None

    @property
    def in_flight(self) -> bool:
        return self.state is RequestState.IN_FLIGHT

    def clear_results(self):
        self.diagnosis = ""
        self.solutions = ""

    def select_image(self, image: EncodedImage):
        self.image = image
        self.error = None
        self.clear_results()

    def reject_image(self, error: ValidationError):
        self.image = None
        self.error = error.message
        self.clear_results()

    def clear(self):
        self.image = None
        self.error = None
        self.clear_results()


async def run_scan(session: ScanSession, client: GeminiClient) -> ScanSession:
    """Diagnostic puis recommandations, strictement en séquence.

    Les erreurs distantes sont enregistrées dans `session.error` ; un
    diagnostic obtenu reste affiché si la seconde étape échoue.
    """
    if session.in_flight:
        raise ScanInProgressError()

    if session.image is None:
        error = NoImageSelectedError()
        session.error = error.message
        raise error

    image = session.image
    session.error = None
    session.clear_results()
    session.state = RequestState.IN_FLIGHT
    logger.info("Scan démarré (%s, %s)", image.filename, image.content_type)

    try:
        # Étape 1 : diagnostic à partir de l'image
        problem = await diagnose(image, client)
        if session.image is not image:
            logger.warning("Image remplacée pendant le scan, résultats ignorés")
            return session
        session.diagnosis = problem

        # Étape 2 : recommandations à partir du diagnostic
        solutions = await suggest_remedies(problem, client)
        if session.image is not image:
            logger.warning("Image remplacée pendant le scan, résultats ignorés")
            return session
        session.solutions = solutions
        logger.info("Scan terminé")

    except RemoteError as e:
        logger.warning("Scan interrompu: %s", e.message)
        if session.image is image:
            session.error = e.message

    finally:
        session.state = RequestState.IDLE

    return session
