__author__ = "Nikita Sakhno"
__license__ = "MIT License"
__version__ = "1.0.0"

from fastapi import FastAPI

from imgscraper.healthcheck.routes import hc_route
from imgscraper.scraper.routes import scraper_router


def create_app() -> FastAPI:
    result = FastAPI(title="Image Scraper", version=__version__)
    result.include_router(scraper_router)
    result.include_router(hc_route)
    return result
