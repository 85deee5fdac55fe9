from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from ..dependencies import get_forms, get_prompt
from ..form import FormBusyError, FormNotFoundError, FormRegistry, FormValidationError, TranslatorForm
from ..prompt import RemoteCallError, Translator
from ..rate_limit import enforce_rate_limit
from ..schemas import FormState, FormUpdate

router = APIRouter(
    prefix="/forms",
    tags=["forms"],
    dependencies=[Depends(enforce_rate_limit)],
)


def lookup_form(form_id: str, forms: FormRegistry = Depends(get_forms)) -> TranslatorForm:
    try:
        return forms.get(form_id)
    except FormNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Form not found.")


def state_response(form: TranslatorForm, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=jsonable_encoder(form.snapshot()))


@router.post("", response_model=FormState, status_code=status.HTTP_201_CREATED)
def create_form(forms: FormRegistry = Depends(get_forms)) -> FormState:
    return forms.create().snapshot()


@router.get("/{form_id}", response_model=FormState)
def get_form(form: TranslatorForm = Depends(lookup_form)) -> FormState:
    return form.snapshot()


@router.patch("/{form_id}", response_model=FormState)
def update_form(payload: FormUpdate, form: TranslatorForm = Depends(lookup_form)) -> FormState:
    form.update(**payload.model_dump(exclude_unset=True))
    return form.snapshot()


@router.post(
    "/{form_id}/submit",
    response_model=FormState,
    responses={
        status.HTTP_409_CONFLICT: {"description": "A translation is already in progress."},
        status.HTTP_422_UNPROCESSABLE_ENTITY: {"model": FormState},
        status.HTTP_502_BAD_GATEWAY: {"model": FormState},
    },
)
async def submit_form(
    payload: FormUpdate | None = None,
    form: TranslatorForm = Depends(lookup_form),
    prompt: Translator = Depends(get_prompt),
) -> FormState | JSONResponse:
    if payload is not None and not form.is_loading:
        form.update(**payload.model_dump(exclude_unset=True))

    try:
        await form.submit(prompt)
    except FormBusyError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Translation already in progress.")
    except FormValidationError:
        return state_response(form, status.HTTP_422_UNPROCESSABLE_ENTITY)
    except RemoteCallError:
        return state_response(form, status.HTTP_502_BAD_GATEWAY)
    return form.snapshot()


@router.post("/{form_id}/swap", response_model=FormState)
def swap_languages(form: TranslatorForm = Depends(lookup_form)) -> FormState:
    form.swap_languages()
    return form.snapshot()


@router.delete("/{form_id}/notification", response_model=FormState)
def dismiss_notification(form: TranslatorForm = Depends(lookup_form)) -> FormState:
    form.dismiss_notification()
    return form.snapshot()


@router.delete("/{form_id}", status_code=status.HTTP_204_NO_CONTENT)
def discard_form(form_id: str, forms: FormRegistry = Depends(get_forms)) -> Response:
    try:
        forms.discard(form_id)
    except FormNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Form not found.")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
