from fastapi import Request

from .form import FormRegistry
from .prompt import Translator


def get_prompt(request: Request) -> Translator:
    return request.app.state.prompt


def get_forms(request: Request) -> FormRegistry:
    return request.app.state.forms
