"""Tests for warble.catalog — dict and gettext catalogs."""

from pathlib import Path

from warble.catalog import DictCatalog, GettextCatalog, TranslationCatalog, available_locales

PO_TEMPLATE = """\
msgid ""
msgstr ""
"Content-Type: text/plain; charset=UTF-8\\n"
"Language: {locale}\\n"

msgid "pages"
msgstr "{pages}"

msgid "users"
msgstr ""
"""


def _write_po(root: Path, locale: str, pages: str, domain: str = "routes") -> Path:
    messages = root / locale / "LC_MESSAGES"
    messages.mkdir(parents=True)
    po_file = messages / f"{domain}.po"
    po_file.write_text(PO_TEMPLATE.format(locale=locale, pages=pages), encoding="utf-8")
    return po_file


class TestDictCatalog:
    def test_lookup(self, catalog: DictCatalog) -> None:
        assert catalog.lookup("routes", "fr", "pages") == "pages_fr"

    def test_missing_returns_key(self, catalog: DictCatalog) -> None:
        assert catalog.lookup("routes", "fr", "unknown") == "unknown"
        assert catalog.lookup("routes", "it", "pages") == "pages"
        assert catalog.lookup("other", "fr", "pages") == "pages"

    def test_contains(self, catalog: DictCatalog) -> None:
        assert catalog.contains("routes", "de", "users")
        assert not catalog.contains("routes", "en", "users")

    def test_available_locales(self, catalog: DictCatalog) -> None:
        assert available_locales(catalog) == ("en", "fr", "de")

    def test_protocol(self, catalog: DictCatalog) -> None:
        assert isinstance(catalog, TranslationCatalog)


class TestGettextCatalog:
    def test_reads_po(self, tmp_path: Path) -> None:
        _write_po(tmp_path, "fr", "pages-fr")
        catalog = GettextCatalog(tmp_path)
        assert catalog.lookup("routes", "fr", "pages") == "pages-fr"
        assert catalog.contains("routes", "fr", "pages")

    def test_empty_translation_is_missing(self, tmp_path: Path) -> None:
        _write_po(tmp_path, "fr", "pages-fr")
        catalog = GettextCatalog(tmp_path)
        assert catalog.lookup("routes", "fr", "users") == "users"
        assert not catalog.contains("routes", "fr", "users")

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        catalog = GettextCatalog(tmp_path)
        assert catalog.lookup("routes", "de", "pages") == "pages"
        assert not catalog.contains("routes", "de", "pages")

    def test_available_locales(self, tmp_path: Path) -> None:
        _write_po(tmp_path, "fr", "pages-fr")
        _write_po(tmp_path, "de", "seiten")
        (tmp_path / "not-a-locale").mkdir()
        assert GettextCatalog(tmp_path).available_locales() == ("de", "fr")

    def test_missing_directory(self, tmp_path: Path) -> None:
        assert GettextCatalog(tmp_path / "nope").available_locales() == ()

    def test_cached(self, tmp_path: Path) -> None:
        po_file = _write_po(tmp_path, "fr", "pages-fr")
        catalog = GettextCatalog(tmp_path)
        assert catalog.lookup("routes", "fr", "pages") == "pages-fr"
        po_file.unlink()
        assert catalog.lookup("routes", "fr", "pages") == "pages-fr"
