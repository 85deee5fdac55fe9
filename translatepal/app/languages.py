from .schemas import LanguageOption

LANGUAGES: tuple[LanguageOption, ...] = tuple(
    LanguageOption(value=name, label=name)
    for name in (
        "English",
        "Spanish",
        "French",
        "German",
        "Japanese",
        "Chinese",
        "Russian",
        "Italian",
        "Portuguese",
        "Arabic",
    )
)

LANGUAGE_VALUES: frozenset[str] = frozenset(option.value for option in LANGUAGES)


def is_supported(value: str | None) -> bool:
    return value is not None and value in LANGUAGE_VALUES
