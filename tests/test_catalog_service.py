"""Tests for catalog_service module."""

from tests.helpers import CATALOG_LISTING, fail, ok
from wslbootstrap.exceptions import CatalogError, CatalogErrorKind
from wslbootstrap.services.catalog_service import CatalogParserV1, CatalogService


def test_parse_returns_rows_in_source_order():
    """Header block is skipped and every data row becomes an entry."""
    entries = CatalogParserV1().parse(CATALOG_LISTING)

    assert [e.name for e in entries] == ["Ubuntu", "Debian", "kali-linux", "Ubuntu-24.04"]
    assert entries[1].friendly_name == "Debian GNU/Linux"
    assert not any(e.is_default for e in entries)


def test_parse_strips_default_marker_token():
    listing = CATALOG_LISTING.replace(
        "Debian                          Debian GNU/Linux",
        "* Debian                        Debian GNU/Linux",
    )

    entries = CatalogParserV1().parse(listing)

    assert [e.name for e in entries] == ["Ubuntu", "Debian", "kali-linux", "Ubuntu-24.04"]
    assert entries[1].is_default
    assert entries[1].friendly_name == "Debian GNU/Linux"


def test_parse_strips_marker_glued_to_name():
    listing = CATALOG_LISTING.replace("Ubuntu                          Ubuntu\n", "*Ubuntu   Ubuntu\n")

    entries = CatalogParserV1().parse(listing)

    assert entries[0].name == "Ubuntu"
    assert entries[0].is_default


def test_parse_ignores_blank_and_padded_lines():
    listing = CATALOG_LISTING + "\n\n   \n   openSUSE-Tumbleweed    openSUSE Tumbleweed   \n"

    entries = CatalogParserV1().parse(listing)

    assert len(entries) == 5
    assert entries[-1].name == "openSUSE-Tumbleweed"
    assert entries[-1].friendly_name == "openSUSE Tumbleweed"


def test_parse_honours_header_size():
    listing = "only one header line\nAlpine   Alpine Linux\n"

    entries = CatalogParserV1(header_lines=1).parse(listing)

    assert [e.name for e in entries] == ["Alpine"]


def test_fetch_available_distributions(runner, wsl):
    runner.on("--list --online", ok(CATALOG_LISTING))

    result = CatalogService(wsl).fetch_available_distributions()

    assert result.is_success
    assert len(result.value) == 4
    assert runner.commands() == ["wsl --list --online"]


def test_fetch_empty_output_is_empty_error(runner, wsl):
    runner.on("--list --online", ok(""))

    result = CatalogService(wsl).fetch_available_distributions()

    assert isinstance(result.error, CatalogError)
    assert result.error.kind is CatalogErrorKind.EMPTY


def test_fetch_failed_listing_is_empty_error(runner, wsl):
    runner.on("--list --online", fail(stderr="Failed to fetch the list distribution"))

    result = CatalogService(wsl).fetch_available_distributions()

    assert result.error.kind is CatalogErrorKind.EMPTY
    assert "Failed to fetch" in result.error.context


def test_fetch_header_only_is_no_entries_error(runner, wsl):
    header_only = "\n".join(CATALOG_LISTING.splitlines()[:4]) + "\n"
    runner.on("--list --online", ok(header_only))

    result = CatalogService(wsl).fetch_available_distributions()

    assert result.error.kind is CatalogErrorKind.NO_ENTRIES
