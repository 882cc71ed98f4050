import pytest

from imgscraper.models import Report, ImageRecord
from imgscraper.scraper.rendering import format_size, render_home, render_result


@pytest.mark.parametrize('size, expected', [
    (0, '0.00 MB'),
    (1048576, '1.00 MB'),
    (1048576 + 2097152, '3.00 MB'),
    (524288, '0.50 MB'),
    (5000, '0.00 MB'),
    (1572864000, '1500.00 MB'),
])
def test_format_size(size: int, expected: str):
    # act & assert
    assert format_size(size) == expected


def test_render_home():
    # act
    result = render_home()

    # assert
    assert '<form action="/go" method="post">' in result
    assert '<input type="text" name="url">' in result


def test_render_result():
    # arrange
    report = Report()
    report.add(ImageRecord('https://cdn.com/a.png', 10, 20, 1048576))
    report.add(ImageRecord('https://cdn.com/b.png?w=1&h=2', 30, 40, 2097152))

    # act
    result = render_result(report)

    # assert
    assert 'Found images: 2, total size: 3.00 MB' in result
    assert '<img src="https://cdn.com/a.png"' in result
    assert '<img src="https://cdn.com/b.png?w=1&amp;h=2"' in result
    assert result.count('<img ') == 2


def test_render_result_escapes_urls():
    # arrange
    report = Report()
    report.add(ImageRecord('https://cdn.com/"><script>alert(1)</script>', 1, 1, 1))

    # act
    result = render_result(report)

    # assert
    assert '<script>' not in result
    assert '&quot;&gt;&lt;script&gt;' in result


def test_render_empty_result():
    # act
    result = render_result(Report())

    # assert
    assert 'Found images: 0, total size: 0.00 MB' in result
    assert '<img ' not in result
