from logging import Logger

from imgscraper.errors import FetchError, PageError, ImageError
from imgscraper.http_client import HttpClient
from imgscraper.images.image_fetcher import ImageFetcher
from imgscraper.models import Report
from imgscraper.pages.extractor import parse_document, extract_image_urls


class ScraperService:
    _http_client: HttpClient
    _image_fetcher: ImageFetcher
    _html_parser: str
    _logger: Logger

    def __init__(self, http_client: HttpClient, image_fetcher: ImageFetcher, html_parser: str, logger: Logger):
        assert http_client is not None, "http_client is required"
        assert image_fetcher is not None, "image_fetcher is required"
        assert logger is not None, "logger is required"

        self._http_client = http_client
        self._image_fetcher = image_fetcher
        self._html_parser = html_parser
        self._logger = logger

    async def scrape(self, page_url: str) -> Report:
        """
        Loads the page and measures every image it references, one after another.
        Images that fail are left out of the report.
        :raises PageError: the page couldn't be loaded or parsed
        """
        try:
            page = await self._http_client.load(page_url)
        except FetchError as e:
            raise PageError(page_url, str(e)) from e

        self._logger.debug("Page was loaded")
        with page.data:
            document = parse_document(page.data.read(), page_url, self._html_parser)

        image_urls = extract_image_urls(document, page_url)
        self._logger.debug(f"Found {len(image_urls)} image references")

        report = Report()
        for image_url in image_urls:
            try:
                record = await self._image_fetcher.fetch(image_url)
            except ImageError as e:
                self._logger.debug(f"Skip image: {e}")
                continue

            report.add(record)

        self._logger.debug(f"Measured {report.count} images, {report.total_size} bytes total")
        return report
