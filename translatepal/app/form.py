import logging
import secrets
import time
from collections import OrderedDict
from threading import Lock
from typing import Callable

from .languages import is_supported
from .prompt import RemoteCallError, Translator
from .schemas import FormState, FormValues, Notification, TranslationRequest, TranslationResult

logger = logging.getLogger(__name__)

TEXT_REQUIRED = "Please enter text to translate."
SOURCE_REQUIRED = "Please select a source language."
TARGET_REQUIRED = "Please select a target language."
LANGUAGES_MUST_DIFFER = "Source and target languages must be different."

TRANSLATION_FAILED = Notification(
    variant="destructive",
    title="Translation Failed",
    description="Could not translate the text. Please try again.",
)


class FormValidationError(Exception):
    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("; ".join(f"{field}: {message}" for field, message in errors.items()))
        self.errors = errors


class FormBusyError(Exception):
    """A translation is already in flight for this form."""


class FormNotFoundError(Exception):
    pass


def validate_values(text: str | None, source_language: str | None, target_language: str | None) -> dict[str, str]:
    """Return field errors keyed by the form's field names; empty when valid."""
    errors: dict[str, str] = {}
    if not text:
        errors["text"] = TEXT_REQUIRED
    if not is_supported(source_language):
        errors["sourceLanguage"] = SOURCE_REQUIRED
    if not is_supported(target_language):
        errors["targetLanguage"] = TARGET_REQUIRED
    elif source_language == target_language:
        errors["targetLanguage"] = LANGUAGES_MUST_DIFFER
    return errors


class TranslatorForm:
    def __init__(self, form_id: str, values: FormValues | None = None) -> None:
        self.id = form_id
        self.values = values or FormValues()
        self.is_loading = False
        self.translated_text = ""
        self.errors: dict[str, str] = {}
        self.notification: Notification | None = None

    def update(self, **changes: str | None) -> None:
        """Set the given fields (``text``, ``source_language``, ``target_language``).

        ``None`` clears a language selection. Errors on updated fields are dropped.
        """
        for name, value in changes.items():
            field = FormValues.model_fields.get(name)
            if field is None:
                raise TypeError(f"unknown form field {name!r}")
            setattr(self.values, name, "" if name == "text" and value is None else value)
            self.errors.pop(field.alias or name, None)

    def validate(self) -> dict[str, str]:
        return validate_values(self.values.text, self.values.source_language, self.values.target_language)

    async def submit(self, prompt: Translator) -> TranslationResult:
        if self.is_loading:
            raise FormBusyError(self.id)

        self.errors = self.validate()
        if self.errors:
            raise FormValidationError(self.errors)

        self.is_loading = True
        self.translated_text = ""
        self.notification = None
        request = TranslationRequest(
            text=self.values.text,
            source_language=self.values.source_language,
            target_language=self.values.target_language,
        )
        try:
            result = await prompt.translate(request)
        except RemoteCallError:
            logger.exception("Translation error for form %s", self.id)
            self.translated_text = ""
            self.notification = TRANSLATION_FAILED
            raise
        finally:
            self.is_loading = False

        self.translated_text = result.translated_text
        return result

    def swap_languages(self) -> None:
        """Swap the languages, and the input text with the last translation."""
        values = self.values
        values.source_language, values.target_language = values.target_language, values.source_language
        values.text, self.translated_text = self.translated_text, values.text
        self.errors = {}

    def dismiss_notification(self) -> None:
        self.notification = None

    def snapshot(self) -> FormState:
        return FormState(
            id=self.id,
            values=self.values.model_copy(),
            is_loading=self.is_loading,
            translated_text=self.translated_text,
            errors=dict(self.errors),
            notification=self.notification,
        )


class FormRegistry:
    """In-memory forms, one per open page. Idle forms expire; the oldest is evicted when full."""

    def __init__(self, ttl_seconds: int, max_forms: int, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = ttl_seconds
        self.max_forms = max_forms
        self.clock = clock
        self._forms: OrderedDict[str, tuple[TranslatorForm, float]] = OrderedDict()
        self._lock = Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._forms)

    def _purge_expired(self, now: float) -> None:
        while self._forms:
            form_id, (_, last_seen) = next(iter(self._forms.items()))
            if now - last_seen <= self.ttl_seconds:
                break
            del self._forms[form_id]
            logger.debug("Expired form %s", form_id)

    def create(self) -> TranslatorForm:
        now = self.clock()
        form = TranslatorForm(secrets.token_hex(16))
        with self._lock:
            self._purge_expired(now)
            while len(self._forms) >= self.max_forms:
                evicted_id, _ = self._forms.popitem(last=False)
                logger.debug("Evicted form %s", evicted_id)
            self._forms[form.id] = (form, now)
        logger.debug("Created form %s", form.id)
        return form

    def get(self, form_id: str) -> TranslatorForm:
        now = self.clock()
        with self._lock:
            self._purge_expired(now)
            entry = self._forms.get(form_id)
            if entry is None:
                raise FormNotFoundError(form_id)
            form, _ = entry
            self._forms[form_id] = (form, now)
            self._forms.move_to_end(form_id)
            return form

    def discard(self, form_id: str) -> None:
        with self._lock:
            if self._forms.pop(form_id, None) is None:
                raise FormNotFoundError(form_id)
