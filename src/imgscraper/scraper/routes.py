from fastapi import APIRouter
from starlette import status
from starlette.responses import Response, HTMLResponse, PlainTextResponse

from imgscraper.errors import PageError
from imgscraper.scraper.dependencies import ScraperServiceDep, PageUrlForm
from imgscraper.scraper.rendering import render_home, render_result

scraper_router = APIRouter()


@scraper_router.get("/", response_class=HTMLResponse)
async def get_home() -> Response:
    return HTMLResponse(render_home())


@scraper_router.post("/go", response_class=HTMLResponse)
async def post_go(scraper_service: ScraperServiceDep, url: PageUrlForm = "") -> Response:
    try:
        report = await scraper_service.scrape(url)
    except PageError as e:
        return PlainTextResponse(str(e), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return HTMLResponse(render_result(report))
