"""Pytest configuration for the gettextinline test suite.

Hypothesis profiles:
- dev: Local development with 200 examples
- ci: CI runs with 50 examples, derandomized
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- HYPOTHESIS_PROFILE env var -> explicit override
- CI=true environment variable -> "ci" profile
- Otherwise -> "dev" profile

Shared fixtures write small PO catalogs to tmp_path.
"""

from __future__ import annotations

import os
import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

# =============================================================================
# HYPOTHESIS PROFILES
# =============================================================================

settings.register_profile(
    "dev",
    max_examples=200,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
)

settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
)

settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


def _detect_profile() -> str:
    """Detect appropriate Hypothesis profile based on execution context."""
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit
    if os.environ.get("CI") == "true":
        return "ci"
    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# CATALOG FIXTURES
# =============================================================================

type PoWriter = Callable[..., Path]

DEFAULT_TEST_PLURAL_FORMS = "nplurals=2; plural=(n != 1);"


def po_source(
    body: str,
    *,
    plural_forms: str | None = DEFAULT_TEST_PLURAL_FORMS,
    language: str | None = None,
) -> str:
    """Prefix PO entries with a header entry."""
    headers = [
        "Project-Id-Version: tests 1.0",
        "MIME-Version: 1.0",
        "Content-Type: text/plain; charset=UTF-8",
        "Content-Transfer-Encoding: 8bit",
    ]
    if language is not None:
        headers.append(f"Language: {language}")
    if plural_forms is not None:
        headers.append(f"Plural-Forms: {plural_forms}")
    header_lines = "\n".join(f'"{h}\\n"' for h in headers)
    return f'msgid ""\nmsgstr ""\n{header_lines}\n\n{textwrap.dedent(body).strip()}\n'


@pytest.fixture
def po_writer(tmp_path: Path) -> PoWriter:
    """Return a function writing named PO files into tmp_path."""

    def _write(
        name: str,
        body: str,
        *,
        plural_forms: str | None = DEFAULT_TEST_PLURAL_FORMS,
        language: str | None = None,
    ) -> Path:
        path = tmp_path / name
        source = po_source(body, plural_forms=plural_forms, language=language)
        path.write_text(source, encoding="utf-8")
        return path

    return _write


FRENCH_PO_BODY = """
    msgid "Hello"
    msgstr "Bonjour"

    #, fuzzy
    msgid "Goodbye"
    msgstr "Au revoir"

    msgid "1 file"
    msgid_plural "{n} files"
    msgstr[0] "1 fichier"
    msgstr[1] "{n} fichiers"

    msgctxt "month"
    msgid "May"
    msgstr "Mai"

    msgctxt "verb"
    msgid "May"
    msgstr "Pouvoir"
"""


@pytest.fixture
def french_po(po_writer: PoWriter) -> Path:
    """Primary French catalog used across engine and rewriter tests."""
    return po_writer("fr.po", FRENCH_PO_BODY, language="fr")
