class ScraperError(Exception):
    """ Base error of the scraper, carries the URL that failed """

    url: str

    def __init__(self, url: str, message: str):
        super().__init__(message)
        self.url = url


class PageError(ScraperError):
    """ The requested page couldn't be fetched or parsed, aborts the whole request """


class ImageError(ScraperError):
    """ A single image couldn't be measured, the image is skipped """


class FetchError(ImageError):
    """ Transport failure while downloading """


class DecodeError(ImageError):
    """ Response body is not an image in one of the accepted formats """


class SizeError(ImageError):
    """ Content-Length header is missing or invalid """
