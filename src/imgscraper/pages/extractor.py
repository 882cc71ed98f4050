from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup, Tag
from bs4.builder import ParserRejectedMarkup
from bs4.element import PageElement
from loguru import logger

from imgscraper.errors import PageError

IMG_TAG = "img"
SRC_ATTR = "src"
ABSOLUTE_PREFIX = "http"
BUILTIN_PARSER = "html.parser"

_logger = logger.bind(source="extractor")


def _keep_repeated_src(attrs: dict, key: str, value: str) -> None:
    """ Repeated `src` values are collected into a list, other repeated attributes keep the first value """
    if key != SRC_ATTR:
        return

    existing = attrs[key]
    if isinstance(existing, list):
        existing.append(value)
    else:
        attrs[key] = [existing, value]


def parse_document(content: bytes, page_url: str, parser: str = BUILTIN_PARSER) -> BeautifulSoup:
    """
    Builds the document tree, the encoding is detected by BeautifulSoup.
    Only the builtin parser reports repeated attributes, other parsers keep one value.
    """
    kwargs = {'on_duplicate_attribute': _keep_repeated_src} if parser == BUILTIN_PARSER else {}
    try:
        return BeautifulSoup(content, parser, **kwargs)
    except ParserRejectedMarkup as e:
        raise PageError(page_url, f"Failed to parse {page_url}: {e}") from e


def resolve_url(candidate: str, base_url: str) -> str | None:
    """
    Resolves image reference against the page URL.
    References starting with "http" are taken as is.
    :return: absolute URL or `None` if either URL is malformed
    """
    if candidate.startswith(ABSOLUTE_PREFIX):
        return candidate

    try:
        urlsplit(base_url)
        urlsplit(candidate)
        return urljoin(base_url, candidate)
    except ValueError:
        return None


def _get_sources(node: Tag) -> list[str]:
    src = node.get(SRC_ATTR, None)
    if isinstance(src, str):
        return [src]
    if isinstance(src, list):
        return [s for s in src if isinstance(s, str)]
    return []


def extract_image_urls(document: PageElement, page_url: str) -> list[str]:
    """
    Collects every `src` of every `<img>` element in document order, duplicates included.
    Malformed references are skipped.
    :param document: Root of the parsed tree
    :param page_url: URL of the page, base for relative references
    :return: list of absolute URLs
    """
    result: list[str] = []
    pending: list[PageElement] = [document]

    while pending:
        node = pending.pop()
        if not isinstance(node, Tag):
            continue

        if node.name == IMG_TAG:
            for src in _get_sources(node):
                image_url = resolve_url(src, page_url)
                if image_url is None:
                    _logger.debug(f"Skip malformed image reference '{src}'")
                else:
                    result.append(image_url)

        # pre-order: first child is popped next
        pending.extend(reversed(node.contents))

    return result
