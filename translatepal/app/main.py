from pathlib import Path
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import APIRouter, FastAPI
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from .form import FormRegistry
from .logging import configure_logging
from .prompt import TranslationPrompt
from .routers import forms, translate
from .settings import load_settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    load_dotenv()
    settings = load_settings()
    configure_logging(settings.log_level)
    app.state.settings = settings
    app.state.prompt = TranslationPrompt.from_settings(settings)
    app.state.forms = FormRegistry(ttl_seconds=settings.form_ttl_seconds, max_forms=settings.max_forms)
    yield


app = FastAPI(
    title="TranslatePal API",
    version="0.1.0",
    description="Translate text between languages with a generative model.",
    lifespan=lifespan,
)

BASE_DIR = Path(__file__).resolve().parent
STATIC_DIR = BASE_DIR / "static"
api_v1_router = APIRouter(prefix="/api/v1")
api_v1_router.include_router(translate.router)
api_v1_router.include_router(forms.router)

@app.get("/health", include_in_schema=False)
@api_v1_router.get("/health", tags=["health"])
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/", include_in_schema=False)
def landing_page() -> FileResponse:
    return FileResponse(STATIC_DIR / "index.html")


app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
app.include_router(api_v1_router)
