"""
Distribution Catalog Service

Fetches 'wsl --list --online' and parses it into DistributionEntry rows.

The parser depends on the listing's text layout (fixed header block, '*'
default marker). When WSL changes that layout, add a new parser version
rather than patching callers.
"""

from typing import List, Optional

from wslbootstrap.constants import CATALOG_DEFAULT_MARKER, CATALOG_HEADER_LINES
from wslbootstrap.exceptions import CatalogError, CatalogErrorKind
from wslbootstrap.models.instance import DistributionEntry
from wslbootstrap.models.results import Result
from wslbootstrap.services.wsl_service import WSLService


class CatalogParserV1:
    """Parser for the catalog listing layout of current WSL releases."""

    version = 1

    def __init__(
        self,
        header_lines: int = CATALOG_HEADER_LINES,
        marker: str = CATALOG_DEFAULT_MARKER,
    ):
        self.header_lines = header_lines
        self.marker = marker

    def parse(self, listing: str) -> List[DistributionEntry]:
        """
        Parse listing text into entries, in source order.

        Args:
            listing: Raw 'wsl --list --online' output

        Returns:
            One entry per non-blank row after the header block
        """
        entries = []
        for line in listing.splitlines()[self.header_lines :]:
            line = line.strip()
            if not line:
                continue

            entry = self._parse_row(line)
            if entry:
                entries.append(entry)

        return entries

    def _parse_row(self, line: str) -> Optional[DistributionEntry]:
        tokens = line.split()
        is_default = False

        if tokens[0] == self.marker:
            is_default = True
            tokens = tokens[1:]
        elif tokens[0].startswith(self.marker):
            is_default = True
            tokens[0] = tokens[0][len(self.marker) :]

        if not tokens:
            return None

        return DistributionEntry(
            name=tokens[0],
            friendly_name=" ".join(tokens[1:]),
            is_default=is_default,
        )


class CatalogService:
    """Distribution catalog fetcher."""

    def __init__(self, wsl: WSLService, parser: Optional[CatalogParserV1] = None):
        self.wsl = wsl
        self.parser = parser or CatalogParserV1()

    def fetch_available_distributions(self) -> Result[List[DistributionEntry]]:
        """
        Fetch and parse the installable distributions.

        Returns:
            Result holding the entries, or a CatalogError of kind EMPTY (no
            output) or NO_ENTRIES (nothing left after parsing)
        """
        result = self.wsl.list_online()

        # A failed listing is treated as no usable output
        if result.is_failure or not result.stdout.strip():
            return Result.fail(
                CatalogError(
                    CatalogErrorKind.EMPTY,
                    "Distribution catalog returned no output",
                    context=result.output or f"exit code {result.exit_code}",
                )
            )

        entries = self.parser.parse(result.stdout)
        if not entries:
            return Result.fail(
                CatalogError(
                    CatalogErrorKind.NO_ENTRIES,
                    "No distributions found in catalog listing",
                    context=f"Parser v{self.parser.version} skipped "
                    f"{self.parser.header_lines} header lines",
                )
            )

        return Result.ok(entries)
