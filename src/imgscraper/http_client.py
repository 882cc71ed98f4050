import functools
import os
import typing
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from io import BytesIO

import anyio.to_thread
from urllib3 import PoolManager, BaseHTTPResponse, Retry, Timeout
from urllib3.exceptions import HTTPError

from imgscraper.config import HttpSettings
from imgscraper.errors import FetchError

HEADER_USER_AGENT = "User-Agent"
CHUNK_SIZE = 64 * 1024

T = typing.TypeVar("T")
P = typing.ParamSpec("P")


@dataclass(frozen=True, slots=True)
class HttpContent:
    """ Completely downloaded response """
    url: str
    """ Requested URL """
    status: int
    """ Response status code """
    content_length: str | None
    """ Raw Content-Length header, None when the header is missing """
    content_type: str | None
    """ Raw Content-Type header """
    data: BytesIO
    """ Response body, positioned at the beginning """


class HttpResponse:
    """ Open response, the connection goes back to the pool on close """
    _http_response: BaseHTTPResponse | None
    _status: int
    _content_length: str | None
    _content_type: str | None
    __slots__ = ['_http_response', '_status', '_content_length', '_content_type']

    def __init__(self, http_response: BaseHTTPResponse):
        assert http_response, "http_response is required"

        self._http_response = http_response
        self._status = http_response.status
        self._content_length = http_response.headers.get('content-length', None)
        self._content_type = http_response.headers.get('content-type', None)

    def __enter__(self) -> Iterable[bytes]:
        assert self._http_response, "error when access http_response"
        return self._http_response.stream(CHUNK_SIZE)

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        if not self._http_response:
            return

        http_response = self._http_response
        self._http_response = None
        http_response.close()
        http_response.release_conn()

    @property
    def status(self) -> int:
        return self._status

    @property
    def content_length(self) -> str | None:
        return self._content_length

    @property
    def content_type(self) -> str | None:
        return self._content_type


class HttpClient(ABC):
    """
    An abstract interface to outgoing HTTP requests
    """

    @abstractmethod
    async def load(self, url: str) -> HttpContent:
        """
        Sends GET request and loads the whole response body into memory
        :param url: Absolute URL
        :return: :class:`HttpContent` with the loaded body
        :raises FetchError: on transport failure, the status code is not checked
        """
        pass


class _AsyncPoolManager:
    _pool_manager: PoolManager

    def __init__(self, pool_manager: PoolManager):
        if not pool_manager:
            raise ValueError("pool_manager is required")

        self._pool_manager = pool_manager

    @staticmethod
    async def _run_async(func: typing.Callable[P, T], *args, **kwargs) -> T:
        func = functools.partial(func, *args, **kwargs)
        return await anyio.to_thread.run_sync(func)

    async def get(self, url: str, headers: dict[str, str]) -> BaseHTTPResponse:
        return await self._run_async(self._pool_manager.request, "GET", url, headers=headers,
                                     preload_content=False)

    @staticmethod
    async def load_to_memory(response: HttpResponse) -> BytesIO:
        def sync_load() -> BytesIO:
            result: BytesIO = BytesIO()
            with response as stream:
                for chunk in stream:
                    result.write(chunk)
            result.seek(0, os.SEEK_SET)
            return result

        return await anyio.to_thread.run_sync(sync_load)


def create_pool_manager(settings: HttpSettings) -> PoolManager:
    retries = Retry(total=settings.max_redirects, connect=0, read=0, status=0, other=0,
                    redirect=settings.max_redirects, raise_on_status=False)
    kwargs: dict[str, typing.Any] = {'retries': retries, 'maxsize': settings.pool_size}
    if settings.timeout:
        kwargs['timeout'] = Timeout(connect=settings.timeout, read=settings.timeout)

    return PoolManager(**kwargs)


class Urllib3HttpClient(HttpClient):
    _pool_manager: _AsyncPoolManager
    _headers: dict[str, str]

    def __init__(self, pool_manager: PoolManager, user_agent: str):
        assert pool_manager is not None, "pool_manager is required"

        self._pool_manager = _AsyncPoolManager(pool_manager)
        self._headers = {HEADER_USER_AGENT: user_agent}

    async def load(self, url: str) -> HttpContent:
        response: HttpResponse | None = None
        try:
            response = HttpResponse(await self._pool_manager.get(url, self._headers))
            data = await self._pool_manager.load_to_memory(response)
            return HttpContent(url=url, status=response.status, content_length=response.content_length,
                               content_type=response.content_type, data=data)
        except (HTTPError, OSError) as e:
            raise FetchError(url, f"Failed to get {url}: {e}") from e
        finally:
            if response:
                response.close()
