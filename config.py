import os
from dataclasses import dataclass

from dotenv import load_dotenv

from errors import ConfigError

DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_TIMEOUT = 60.0


@dataclass(frozen=True)
class Settings:
    api_key: str
    model: str = DEFAULT_MODEL
    api_base: str = DEFAULT_API_BASE
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = "INFO"

    def __repr__(self):
        # La clé ne doit jamais apparaître dans les logs
        return (f"Settings(model={self.model!r}, api_base={self.api_base!r}, "
                f"timeout={self.timeout!r}, log_level={self.log_level!r})")


def load_settings() -> Settings:
    """Lit la configuration depuis l'environnement (et un éventuel fichier .env)."""
    load_dotenv()

    api_key = os.getenv("GEMINI_API_KEY") or os.getenv("VITE_API_KEY")
    if not api_key:
        raise ConfigError("GEMINI_API_KEY is not set")

    timeout = os.getenv("GEMINI_TIMEOUT", str(DEFAULT_TIMEOUT))
    try:
        timeout = float(timeout)
    except ValueError:
        raise ConfigError(f"GEMINI_TIMEOUT must be a number, got {timeout!r}")

    return Settings(
        api_key=api_key,
        model=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
        api_base=os.getenv("GEMINI_API_BASE", DEFAULT_API_BASE).rstrip("/"),
        timeout=timeout,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
