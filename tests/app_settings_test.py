import pytest

from imgscraper.config import AppSettings, HttpSettings, DEFAULT_USER_AGENT


def test_defaults():
    # arrange & act
    app_settings = AppSettings()

    # assert
    assert app_settings.http == HttpSettings()
    assert app_settings.http.timeout is None
    assert app_settings.http.max_redirects == 10
    assert app_settings.http.user_agent == DEFAULT_USER_AGENT
    assert app_settings.images.formats is None
    assert app_settings.html_parser == 'html.parser'
    assert app_settings.log_level == 'info'


def test_uvicorn_defaults():
    # arrange & act
    app_settings = AppSettings()

    # assert
    assert app_settings.uvicorn['host'] == '0.0.0.0'
    assert app_settings.uvicorn['port'] == 8081


def test_uvicorn_keeps_explicit_values():
    # arrange & act
    app_settings = AppSettings(uvicorn={'port': 9000, 'workers': 2})

    # assert
    assert app_settings.uvicorn == {'host': '0.0.0.0', 'port': 9000, 'workers': 2}


def test_http_settings_from_query_string():
    # arrange & act
    app_settings = AppSettings(http='timeout=2.5&max_redirects=3&user_agent=test-agent')

    # assert
    assert app_settings.http.timeout == 2.5
    assert app_settings.http.max_redirects == 3
    assert app_settings.http.user_agent == 'test-agent'
    assert app_settings.http.pool_size == 10


@pytest.mark.parametrize('raw_formats, expected', [
    ('png,jpeg', ['PNG', 'JPEG']),
    (' png , gif ,', ['PNG', 'GIF']),
    ('', None),
])
def test_image_formats_from_string(raw_formats: str, expected: list[str] | None):
    # arrange & act
    app_settings = AppSettings(images={'formats': raw_formats})

    # assert
    assert app_settings.images.formats == expected


def test_env_overrides(monkeypatch):
    # arrange
    monkeypatch.setenv('HTML_PARSER', 'lxml')
    monkeypatch.setenv('HTTP__TIMEOUT', '5')
    monkeypatch.setenv('IMAGES__FORMATS', 'png,gif')
    monkeypatch.setenv('LOG_LEVEL', 'debug')

    # act
    app_settings = AppSettings()

    # assert
    assert app_settings.html_parser == 'lxml'
    assert app_settings.http.timeout == 5.0
    assert app_settings.images.formats == ['PNG', 'GIF']
    assert app_settings.log_level == 'debug'
