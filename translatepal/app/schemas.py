from typing import Literal

from pydantic import BaseModel, Field


class LanguageOption(BaseModel):
    value: str
    label: str

    model_config = {"frozen": True}


class TranslationRequest(BaseModel):
    text: str = Field(..., description="The text to be translated.")
    source_language: str = Field(
        ...,
        alias="sourceLanguage",
        description="The language of the input text.",
    )
    target_language: str = Field(
        ...,
        alias="targetLanguage",
        description="The language to translate the text to.",
    )

    model_config = {"populate_by_name": True}


class TranslationInput(BaseModel):
    text: str | None = None
    source_language: str | None = Field(default=None, alias="sourceLanguage")
    target_language: str | None = Field(default=None, alias="targetLanguage")

    model_config = {"populate_by_name": True}


class TranslationResult(BaseModel):
    translated_text: str = Field(..., alias="translatedText", description="The translated text.")

    model_config = {"populate_by_name": True}


class FormValues(BaseModel):
    text: str = ""
    source_language: str | None = Field(default="English", alias="sourceLanguage")
    target_language: str | None = Field(default="Spanish", alias="targetLanguage")

    model_config = {"populate_by_name": True}


class FormUpdate(BaseModel):
    text: str | None = None
    source_language: str | None = Field(default=None, alias="sourceLanguage")
    target_language: str | None = Field(default=None, alias="targetLanguage")

    model_config = {"populate_by_name": True}


class Notification(BaseModel):
    variant: Literal["default", "destructive"] = "default"
    title: str
    description: str | None = None


class FormState(BaseModel):
    id: str
    values: FormValues
    is_loading: bool = Field(default=False, alias="isLoading")
    translated_text: str = Field(default="", alias="translatedText")
    errors: dict[str, str] = Field(default_factory=dict)
    notification: Notification | None = None

    model_config = {"populate_by_name": True}
