from html import escape

from imgscraper.models import Report

BYTES_IN_MB = 1024 * 1024

_HOME_PAGE = """<html>
 <head>
  <title>Image Scraper</title>
 </head>
 <body>
  <form action="/go" method="post">
   URL: <input type="text" name="url">
   <button type="submit">Go</button>
  </form>
 </body>
</html>"""

_RESULT_HEAD = """<html>
 <head>
  <title>Image Scraper Result</title>
 </head>
 <body>
  <div>
   <h3>Found images: {count}, total size: {total_size}</h3>
  </div>
  <div style="display: flex; flex-wrap: wrap;">"""

_RESULT_ITEM = """
   <div style="width: 25%; padding: 5px;">
    <img src="{url}" style="max-width: 100%;" title="{width}x{height}, {size}">
   </div>"""

_RESULT_TAIL = """
  </div>
 </body>
</html>"""


def format_size(size: int) -> str:
    """ Formats bytes count as megabytes, e.g. '3.00 MB' """
    return f"{size / BYTES_IN_MB:.2f} MB"


def render_home() -> str:
    return _HOME_PAGE


def render_result(report: Report) -> str:
    parts = [_RESULT_HEAD.format(count=report.count, total_size=format_size(report.total_size))]
    for record in report.records:
        parts.append(_RESULT_ITEM.format(url=escape(record.url), width=record.width, height=record.height,
                                         size=format_size(record.size)))
    parts.append(_RESULT_TAIL)
    return "".join(parts)
