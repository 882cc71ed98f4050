from logging import Logger

from imgscraper.errors import DecodeError, SizeError
from imgscraper.http_client import HttpClient
from imgscraper.images.image_decoder import read_image_info_async
from imgscraper.models import ImageRecord


def parse_content_length(url: str, content_length: str | None) -> int:
    """ Converts Content-Length header into non-negative bytes count, only ASCII digits are accepted """
    if content_length is None:
        raise SizeError(url, f"{url} doesn't declare Content-Length")

    value = content_length.strip()
    if not value.isascii() or not value.isdigit():
        raise SizeError(url, f"{url} declares invalid Content-Length '{content_length}'")

    return int(value, 10)


class ImageFetcher:
    _http_client: HttpClient
    _formats: list[str] | None
    _logger: Logger

    def __init__(self, http_client: HttpClient, formats: list[str] | None, logger: Logger):
        assert http_client is not None, "http_client is required"
        assert logger is not None, "logger is required"

        self._http_client = http_client
        self._formats = formats
        self._logger = logger

    async def fetch(self, url: str) -> ImageRecord:
        """
        Downloads the image and measures it
        :param url: Absolute image URL
        :return: :class:`ImageRecord` with decoded dimensions and declared size
        :raises FetchError: the image couldn't be downloaded
        :raises DecodeError: the content is not a supported image
        :raises SizeError: Content-Length is missing or invalid
        """
        content = await self._http_client.load(url)
        self._logger.debug(f"Loaded {url}, content type: {content.content_type}")

        image_info = await read_image_info_async(content.data, self._formats)
        if image_info.error:
            raise DecodeError(url, f"Failed to decode {url}: {image_info.error}")

        size = parse_content_length(url, content.content_length)
        return ImageRecord(url=url, width=image_info.width, height=image_info.height, size=size)
