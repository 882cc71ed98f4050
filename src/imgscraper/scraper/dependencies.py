from functools import lru_cache
from typing import Annotated

from logging import Logger
from fastapi import Form
from fastapi.params import Depends
from loguru import logger

from imgscraper.config import get_app_settings
from imgscraper.http_client import HttpClient, Urllib3HttpClient, create_pool_manager
from imgscraper.images.image_fetcher import ImageFetcher
from imgscraper.scraper.service import ScraperService

PageUrlForm = Annotated[str, Form()]


@lru_cache
def get_http_client() -> HttpClient:
    http_settings = get_app_settings().http
    return Urllib3HttpClient(create_pool_manager(http_settings), http_settings.user_agent)


HttpClientDep = Annotated[HttpClient, Depends(get_http_client)]


def _get_request_logger(url: PageUrlForm = "") -> Logger:
    return logger.bind(page_url=url)  # type: ignore


RequestLoggerDep = Annotated[Logger, Depends(_get_request_logger)]


def _get_image_fetcher(http_client: HttpClientDep, request_logger: RequestLoggerDep) -> ImageFetcher:
    return ImageFetcher(http_client, get_app_settings().images.formats, request_logger)


ImageFetcherDep = Annotated[ImageFetcher, Depends(_get_image_fetcher)]


def _get_scraper_service(http_client: HttpClientDep,
                         image_fetcher: ImageFetcherDep,
                         request_logger: RequestLoggerDep) -> ScraperService:
    return ScraperService(http_client, image_fetcher, get_app_settings().html_parser, request_logger)


ScraperServiceDep = Annotated[ScraperService, Depends(_get_scraper_service)]
