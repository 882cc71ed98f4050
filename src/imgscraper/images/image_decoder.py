import functools
from io import BytesIO

import PIL
import anyio.to_thread
from PIL import Image

from imgscraper.images.models import ImageInfo


def read_image_info(data: BytesIO, formats: list[str] | None = None) -> ImageInfo:
    """
    Decodes the image to get its dimensions, closes `data` when done
    :param data: Image bytes
    :param formats: Accepted Pillow formats, `None` to accept any
    :return: :class:`ImageInfo`, `error` is set when the content is not a supported image
    """
    assert data is not None, "data cannot be None"

    with data:
        try:
            with Image.open(data, formats=formats) as im:
                im.load()
                width, height = im.size
                return ImageInfo(width=width, height=height, image_format=im.format)
        except (PIL.UnidentifiedImageError, ValueError, TypeError, Exception) as e:
            return ImageInfo(error=e)


async def read_image_info_async(data: BytesIO, formats: list[str] | None = None) -> ImageInfo:
    func = functools.partial(read_image_info, data=data, formats=formats)
    return await anyio.to_thread.run_sync(func)
