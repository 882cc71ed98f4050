import sys

import uvicorn
from loguru import logger

from imgscraper import __version__, create_app
from imgscraper.config import get_app_settings


def __configure_logger():
    app_settings = get_app_settings()
    logger.remove()
    logger.add(sys.stdout, level=app_settings.log_level.upper(), format=app_settings.log_fmt)
    logger.add(sys.stderr, level="ERROR", format=app_settings.log_fmt)
    logger.add("logs/log_{time}.log", level=app_settings.log_level.upper(), retention="10 days",
               format=app_settings.log_fmt)


if __name__ == "__main__":
    __configure_logger()

    print(f"imgscraper v{__version__}")
    app_cfg = get_app_settings()
    print(f" * listening: http://{app_cfg.uvicorn['host']}:{app_cfg.uvicorn['port']}\n"
          f" * html parser: {app_cfg.html_parser}\n"
          f" * image formats: {', '.join(app_cfg.images.formats or ['<any>'])}\n"
          f" * http timeout: {app_cfg.http.timeout or '<none>'}")

    l = logger.bind(source="core")
    l.info("Starting web host")

    web_app = create_app()
    uvicorn.run(web_app, **app_cfg.uvicorn)
