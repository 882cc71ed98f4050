import typing
from urllib import parse

from pydantic import BaseModel, Field, model_validator
from pydantic.dataclasses import dataclass
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource, JsonConfigSettingsSource

DEFAULT_USER_AGENT = "imgscraper/1.0"


@dataclass(frozen=True, slots=True)
class HttpSettings:
    timeout: float | None = None
    """ Connect and read timeout in seconds, no timeout by default """

    max_redirects: int = 10
    """ How many redirects are followed before the request fails, 10 by default """

    user_agent: str = DEFAULT_USER_AGENT
    """ User-Agent header sent with every request """

    pool_size: int = 10
    """ Number of kept connections per host """


class ImageSettings(BaseModel):
    formats: list[str] | None = None
    """ Accepted Pillow format names (PNG, JPEG, GIF...), None accepts every format Pillow knows """

    # noinspection PyNestedDecorators
    @model_validator(mode='before')
    @classmethod
    def before_validator(cls, data: typing.Any) -> typing.Any:
        if isinstance(data, dict) and isinstance(data.get('formats', None), str):
            data = dict(data)
            data['formats'] = _parse_formats(str(data['formats']))
        return data


def _parse_formats(s: str) -> list[str] | None:
    """ Converts comma separated string 'png,jpeg' into ['PNG', 'JPEG'] """
    formats = [t.strip().upper() for t in s.split(',') if t.strip()]
    return formats or None


def _parse_http_settings(s: str | None) -> dict | None:
    if not s:
        return None

    raw_values = parse.parse_qs(s)
    raw_dict = {k: v[0] for k, v in raw_values.items()}
    return raw_dict


class AppSettings(BaseSettings):
    """ Application settings """

    http: HttpSettings = HttpSettings()
    """ Outgoing HTTP client parameters """

    images: ImageSettings = ImageSettings()
    """ Image decoding parameters """

    html_parser: str = 'html.parser'
    """ BeautifulSoup tree builder used for pages. Default: html.parser """

    log_level: str = 'info'
    """ Logging level. Options: critical, error, warning, info, debug, trace. Default: info """

    log_fmt: str = "{time} | {level}: {extra} {message}"
    """ Logging message format """

    uvicorn: dict[str, typing.Any] = Field(default_factory=dict[str, typing.Any])
    """ uvicorn specific settings """

    model_config = SettingsConfigDict(env_file=".env", nested_model_default_partial_update=True,
                                      env_nested_delimiter="__", extra='ignore', case_sensitive=False,
                                      json_file="config.json", enable_decoding=False)

    # noinspection PyNestedDecorators
    @model_validator(mode='before')
    @classmethod
    def before_validator(cls, data: typing.Any) -> typing.Any:
        result = data
        if isinstance(data, dict):
            raw_dict = dict(data)

            uvicorn_settings = dict(raw_dict.get('uvicorn', None) or dict[str, typing.Any]())
            uvicorn_settings.setdefault('host', '0.0.0.0')
            uvicorn_settings.setdefault('port', 8081)
            raw_dict['uvicorn'] = uvicorn_settings

            if isinstance(raw_dict.get('http', None), str):
                raw_dict['http'] = _parse_http_settings(str(raw_dict['http'])) or dict()

            if isinstance(raw_dict.get('images', None), str):
                raw_dict['images'] = {'formats': str(raw_dict['images'])}

            result = raw_dict

        return result

    @classmethod
    def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,
            file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return init_settings, env_settings, JsonConfigSettingsSource(
            settings_cls), dotenv_settings, file_secret_settings


_app_settings: AppSettings | None = None


def get_app_settings() -> AppSettings:
    global _app_settings
    if not _app_settings:
        _app_settings = AppSettings()
    return _app_settings
