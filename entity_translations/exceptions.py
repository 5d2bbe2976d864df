class EntityTranslationsError(Exception):
    """Base class for all errors raised by entity_translations."""


class TranslatableConfigurationError(EntityTranslationsError):
    """The translatable configuration is malformed or references unknown models."""


class NotTranslatableError(EntityTranslationsError):
    """The entity's model is not registered in the translatable configuration."""


class MissingEntityIdError(EntityTranslationsError):
    """The entity has no id, so its translations cannot be keyed."""


class UnsupportedLocaleError(EntityTranslationsError):
    """The locale is not one of the configured LOCALES."""


class MachineTranslationError(EntityTranslationsError):
    """The machine translation backend failed or returned nothing."""
