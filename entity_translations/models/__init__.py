from .translations import TranslationEntry

__all__ = [
    "TranslationEntry",
]
