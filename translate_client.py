import argparse
import os
from typing import Any

import requests

TRANSLATEPAL_URL = os.getenv("TRANSLATEPAL_URL", "http://127.0.0.1:8000")


def list_languages() -> list[str]:
    response = requests.get(f"{TRANSLATEPAL_URL}/api/v1/languages", timeout=10)
    response.raise_for_status()
    return [language["value"] for language in response.json()]


def translate(text: str, source_language: str, target_language: str) -> dict[str, Any]:
    response = requests.post(
        f"{TRANSLATEPAL_URL}/api/v1/translate",
        json={"text": text, "sourceLanguage": source_language, "targetLanguage": target_language},
        timeout=60,
    )
    response.raise_for_status()
    return response.json()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Translate text through a running TranslatePal server.")
    parser.add_argument("text")
    parser.add_argument("--source", default="English")
    parser.add_argument("--target", default="Spanish")
    parser.add_argument("--swap", action="store_true", help="translate the result back to the source language")
    args = parser.parse_args(argv)

    print("Languages:", ", ".join(list_languages()))
    result = translate(args.text, args.source, args.target)
    translated = result["translatedText"]
    print(f"{args.source} -> {args.target}:", translated)

    if args.swap:
        back = translate(translated, args.target, args.source)
        print(f"{args.target} -> {args.source}:", back["translatedText"])


if __name__ == "__main__":
    main()
