from fastapi import APIRouter

from imgscraper import __version__

hc_route = APIRouter()


@hc_route.get("/hc")
@hc_route.get("/health")
def get_health_check() -> dict:
    return {'status': 'ok', 'version': __version__}
