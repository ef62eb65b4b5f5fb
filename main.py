import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI, File, HTTPException, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from config import load_settings
from errors import NoImageSelectedError, NotAnImageError, ScanInProgressError, ValidationError
from gemini_client import GeminiClient
from image_ingestion import ingest_upload
from presentation import render_context
from service import ScanSession, run_scan

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger("farm-scanner")

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

# Variables globales
CLIENT: Optional[GeminiClient] = None
SESSION = ScanSession()


def load_client():
    global CLIENT
    if CLIENT is not None:
        return
    try:
        settings = load_settings()
        logging.getLogger().setLevel(settings.log_level)
        CLIENT = GeminiClient(settings)
        logger.info("Client Gemini prêt (%s)", settings.model)
    except Exception:
        logger.exception("Configuration invalide au démarrage")
        raise


# Prépare le client Gemini au démarrage
@asynccontextmanager
async def lifespan(app: FastAPI):
    load_client()
    yield


app = FastAPI(
    title="Farm Health Scanner",
    description="Diagnostic de parcelles et de plantes à partir d'images, avec recommandations",
    version="1.0.0",
    lifespan=lifespan,
)

# Configuration CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _redirect_home() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=303)


@app.get("/", response_class=HTMLResponse)
async def index(request: Request):
    """Formulaire d'upload et résultats du dernier scan"""
    return templates.TemplateResponse(request, "index.html", render_context(SESSION))


@app.post("/image")
async def select_image(file: Optional[UploadFile] = File(None)):
    """Remplace l'image sélectionnée ; les résultats précédents sont effacés"""
    if SESSION.in_flight:
        raise HTTPException(status_code=409, detail=ScanInProgressError.message)

    if file is None or not file.filename:
        SESSION.clear()
        return _redirect_home()

    try:
        image = await ingest_upload(file)
    except ValidationError as e:
        SESSION.reject_image(e)
        return _redirect_home()

    SESSION.select_image(image)
    logger.info("Image sélectionnée: %s (%s)", image.filename, image.content_type)
    return _redirect_home()


@app.post("/scan")
async def scan():
    """Lance le diagnostic puis les recommandations sur l'image sélectionnée"""
    if CLIENT is None:
        raise HTTPException(status_code=503, detail="Client Gemini non configuré")

    try:
        await run_scan(SESSION, CLIENT)
    except NoImageSelectedError:
        pass  # message déjà affiché dans le panneau d'erreur
    except ScanInProgressError as e:
        raise HTTPException(status_code=409, detail=e.message)

    return _redirect_home()


@app.post("/reset")
async def reset():
    if SESSION.in_flight:
        raise HTTPException(status_code=409, detail=ScanInProgressError.message)
    SESSION.clear()
    return _redirect_home()


@app.get("/health")
async def health_check():
    """Vérifie l'état de l'API et du client"""
    return {
        "status": "healthy",
        "client_configured": CLIENT is not None,
        "model": CLIENT.settings.model if CLIENT else None,
        "request_state": SESSION.state.value,
    }


@app.post("/api/scan")
async def api_scan(file: UploadFile = File(...)):
    """
    Scan complet en une requête, indépendant de la session du formulaire

    Args:
        file: image de la parcelle ou de la plante

    Returns:
        JSON avec le diagnostic, les recommandations et l'éventuelle erreur
    """
    if CLIENT is None:
        raise HTTPException(status_code=503, detail="Client Gemini non configuré")

    try:
        image = await ingest_upload(file)
    except NotAnImageError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.message)

    session = ScanSession()
    session.select_image(image)
    await run_scan(session, CLIENT)

    return {
        "success": session.error is None,
        "diagnosis": session.diagnosis,
        "solutions": session.solutions,
        "error": session.error,
        "filename": file.filename,
    }


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
