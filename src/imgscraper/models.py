from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ImageRecord:
    """ Measured image """
    url: str
    """ Absolute image URL """
    width: int
    """ Width in pixels """
    height: int
    """ Height in pixels """
    size: int
    """ Declared size in bytes """


@dataclass(slots=True)
class Report:
    records: list[ImageRecord] = field(default_factory=list)
    total_size: int = 0

    def add(self, record: ImageRecord) -> None:
        self.records.append(record)
        self.total_size += record.size

    @property
    def count(self) -> int:
        return len(self.records)
