"""Engine configuration.

TranslatorConfig gathers every option the engine understands in one frozen
object. ``from_options`` accepts a plain mapping using either Python
snake_case keys or the camelCase keys used in bundler plugin options
(``fallbackTranslation``, ``reportInvalidAs``, ``transformToJS``, ...).

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from gettextinline.catalog.store import CatalogStore
from gettextinline.catalog.types import CatalogSource
from gettextinline.constants import DEFAULT_PLURAL_FACTORY_NAME
from gettextinline.diagnostics import ConfigurationError, Diagnostic, DiagnosticCode
from gettextinline.enums import ReportLevel
from gettextinline.matching import FunctionNames
from gettextinline.serializer import TextTransform, ToSourceTransform

__all__ = ["TranslatorConfig"]

# Option aliases that do not follow plain camelCase conversion.
_ALIASES: Mapping[str, str] = {
    "transformToJS": "transform_to_source",
    "transform_to_js": "transform_to_source",
}


def _to_snake_case(name: str) -> str:
    """Convert camelCase option names to snake_case.

    Example:
        >>> _to_snake_case("reportInvalidAs")
        'report_invalid_as'
    """
    if name in _ALIASES:
        return _ALIASES[name]
    return "".join(f"_{c.lower()}" if c.isupper() else c for c in name)


@dataclass(frozen=True, slots=True)
class TranslatorConfig:
    """Immutable configuration for TranslationEngine.

    Attributes:
        translation: Primary catalog path, loaded CatalogStore, or resolver
            callback ``(context, singular, plural) -> str | list[str] | None``
        fallback_translation: Optional second source consulted on a miss
        include_fuzzy: Use translations flagged fuzzy (default: False)
        report_invalid_as: Reporting level for invalid call usage
        plural_factory_function_name: Zero-argument call replaced by the
            plural function (default: "_p")
        plural_function: Plural rule text overriding the catalog's header
        plural_locale: Locale whose CLDR rule is used when the primary catalog
            declares no Plural-Forms header
        gettext_function_name: Name for (singular)
        ngettext_function_name: Name for (singular, plural)
        pgettext_function_name: Name for (context, singular)
        npgettext_function_name: Name for (context, singular, plural)
        transform_text: Applied to every translated string before serializing
        transform_to_source: Replaces default literal serialization

    Example:
        >>> config = TranslatorConfig.from_options({
        ...     "translation": "locale/fr.po",
        ...     "reportInvalidAs": "warning",
        ... })
        >>> config.report_invalid_as
        <ReportLevel.WARNING: 'warning'>
    """

    translation: CatalogSource | CatalogStore
    fallback_translation: CatalogSource | CatalogStore | None = None
    include_fuzzy: bool = False
    report_invalid_as: ReportLevel = ReportLevel.ERROR
    plural_factory_function_name: str = DEFAULT_PLURAL_FACTORY_NAME
    plural_function: str | None = None
    plural_locale: str | None = None
    gettext_function_name: str | None = None
    ngettext_function_name: str | None = None
    pgettext_function_name: str | None = None
    npgettext_function_name: str | None = None
    transform_text: TextTransform | None = None
    transform_to_source: ToSourceTransform | None = None

    def __post_init__(self) -> None:
        """Validate and normalize option values.

        Raises:
            ConfigurationError: If translation is missing, include_fuzzy is
                not a bool, report_invalid_as is not one of error/warning/none
                (None counts as error), or a function name is not a valid
                identifier
        """
        if self.translation is None or self.translation == "":
            raise ConfigurationError(
                Diagnostic(
                    code=DiagnosticCode.TRANSLATION_REQUIRED,
                    message='The "translation" option is required',
                )
            )
        if not isinstance(self.include_fuzzy, bool):
            raise _invalid_value("include_fuzzy", self.include_fuzzy)
        # An unset level reports as "error".
        if self.report_invalid_as is None:
            level = ReportLevel.ERROR
        else:
            try:
                level = ReportLevel(self.report_invalid_as)
            except ValueError:
                raise _invalid_value("report_invalid_as", self.report_invalid_as) from None
        object.__setattr__(self, "report_invalid_as", level)

        if not self.plural_factory_function_name:
            object.__setattr__(self, "plural_factory_function_name", DEFAULT_PLURAL_FACTORY_NAME)
        for option in (
            "plural_factory_function_name",
            "gettext_function_name",
            "ngettext_function_name",
            "pgettext_function_name",
            "npgettext_function_name",
        ):
            value = getattr(self, option)
            if value == "":
                object.__setattr__(self, option, None)
                continue
            if value is not None and not (isinstance(value, str) and value.isidentifier()):
                raise _invalid_value(option, value)

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> TranslatorConfig:
        """Build a config from a plain options mapping.

        Raises:
            ConfigurationError: On unknown option names or invalid values
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in options.items():
            name = _to_snake_case(key)
            if name not in known:
                raise ConfigurationError(
                    Diagnostic(
                        code=DiagnosticCode.UNKNOWN_OPTION,
                        message=f'Unknown option "{key}"',
                        hint=f"Known options: {', '.join(sorted(known))}",
                    )
                )
            kwargs[name] = value
        if "translation" not in kwargs:
            kwargs["translation"] = None
        return cls(**kwargs)

    @property
    def function_names(self) -> FunctionNames:
        """Configured names for the dispatch table."""
        return FunctionNames(
            gettext=self.gettext_function_name or None,
            ngettext=self.ngettext_function_name or None,
            pgettext=self.pgettext_function_name or None,
            npgettext=self.npgettext_function_name or None,
            plural_factory=self.plural_factory_function_name,
        )


def _invalid_value(option: str, value: object) -> ConfigurationError:
    return ConfigurationError(
        Diagnostic(
            code=DiagnosticCode.INVALID_OPTION_VALUE,
            message=f'Invalid value for option "{option}": {value!r}',
        )
    )
