import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ..dependencies import get_prompt
from ..form import validate_values
from ..languages import LANGUAGES
from ..prompt import RemoteCallError, Translator
from ..rate_limit import enforce_rate_limit
from ..schemas import LanguageOption, TranslationInput, TranslationRequest, TranslationResult

logger = logging.getLogger(__name__)

router = APIRouter(tags=["translate"], dependencies=[Depends(enforce_rate_limit)])


@router.get("/languages", response_model=list[LanguageOption])
def list_languages() -> list[LanguageOption]:
    return list(LANGUAGES)


@router.post("/translate", response_model=TranslationResult)
async def translate(payload: TranslationInput, prompt: Translator = Depends(get_prompt)) -> TranslationResult:
    errors = validate_values(payload.text, payload.source_language, payload.target_language)
    if errors:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=errors)

    request = TranslationRequest(
        text=payload.text,
        source_language=payload.source_language,
        target_language=payload.target_language,
    )
    try:
        return await prompt.translate(request)
    except RemoteCallError as exc:
        logger.exception("Translation error for %s -> %s", request.source_language, request.target_language)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
