from .translator import Translator, get_translator

__all__ = [
    "Translator",
    "get_translator",
]
