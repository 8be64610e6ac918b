"""
HTML Query Service

Extracts schedule table rows from the fetched HTML document.
The refresh pipeline only depends on the RowQuery protocol, so the parsing
engine can be swapped (or faked in tests) without touching the core.
"""
from typing import Protocol
import logging

from lxml import etree  # type: ignore
from lxml import html as lxml_html  # type: ignore

from run_ticker.errors import DocumentParseFailure
from run_ticker.services.fetch_types import RawRow


logger = logging.getLogger(__name__)

DEFAULT_ROWS_XPATH = "//table[@id='runTable']/tbody/tr"


class RowQuery(Protocol):
    """Given document text, return the rows of the schedule table body."""

    def select_rows(self, document: str) -> list[RawRow]:
        ...


class LxmlRowQuery:
    """RowQuery backed by lxml.html and an XPath row selector."""

    def __init__(self, rows_xpath: str = DEFAULT_ROWS_XPATH) -> None:
        self.rows_xpath = rows_xpath
        self._xpath = etree.XPath(rows_xpath)

    def select_rows(self, document: str) -> list[RawRow]:
        """
        Parse the document and return every matching row's cell texts

        Args:
            document: Full HTML document text

        Returns:
            Rows in document order, each a tuple of trimmed cell texts

        Raises:
            DocumentParseFailure: If the document cannot be parsed as HTML
        """
        if not document or not document.strip():
            raise DocumentParseFailure("Schedule document is empty")

        try:
            root = lxml_html.document_fromstring(document)
        except (etree.ParserError, etree.XMLSyntaxError, ValueError) as e:
            logger.error(f"HTML parsing error: {e}")
            raise DocumentParseFailure(f"Schedule document is not parseable HTML: {e}") from e

        try:
            row_elements = self._xpath(root)
        except etree.XPathEvalError as e:
            raise DocumentParseFailure(f"Row selector failed on document: {e}") from e

        rows = [_row_cells(row) for row in row_elements if isinstance(row, etree._Element)]
        logger.debug(f"Selected {len(rows)} rows with {self.rows_xpath}")
        return rows


def _row_cells(row: etree._Element) -> RawRow:
    """Trimmed text of every element child of a row (comments and PIs skipped)"""
    return tuple(
        child.text_content().strip()
        for child in row.iterchildren()
        if isinstance(child.tag, str)
    )
