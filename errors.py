"""Exceptions du scanner. Chaque exception porte un message affichable."""
from typing import Optional


class ScannerError(Exception):
    message = "Unexpected error."

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def add_context(self, prefix: str) -> "ScannerError":
        """Préfixe le message (affiché et dans les tracebacks)."""
        self.message = f"{prefix}: {self.message}"
        self.args = (self.message,)
        return self


class ConfigError(ScannerError):
    pass


# --- Validation de l'image ---

class ValidationError(ScannerError):
    pass


class NotAnImageError(ValidationError):
    message = "Please upload an image file (e.g., JPEG, PNG)."


class ImageReadError(ValidationError):
    message = "Failed to read image file."


# --- Garde de l'orchestration ---

class GuardError(ScannerError):
    pass


class NoImageSelectedError(GuardError):
    message = "Please select an image to scan."


class ScanInProgressError(GuardError):
    message = "A scan is already running."


# --- Appels distants ---

class RemoteError(ScannerError):
    pass


class RequestFailedError(RemoteError):
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"API error: {detail}")


class EmptyResponseError(RemoteError):
    message = "No valid response from the generative API."
