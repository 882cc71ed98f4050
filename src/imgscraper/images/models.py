from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ImageInfo:
    width: int = 0
    height: int = 0
    image_format: str | None = None
    error: Exception | None = None
