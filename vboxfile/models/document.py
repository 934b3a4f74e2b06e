"""
In-memory VBOX document.

Channels and sample rows only ever grow. The serializer in
vboxfile.services.writer consumes the document without changing it.
"""

import logging
from datetime import datetime
from typing import Iterable, Optional

from vboxfile.errors import DuplicateChannelError
from vboxfile.models.channel import AnyChannelName, Channel
from vboxfile.models.values import ChannelValue


logger = logging.getLogger(__name__)

SampleRow = tuple[ChannelValue, ...]


class VboxDocument:
    """
    Channels, sample rows, comment and creation time of a VBOX file.

    Channel order drives the order of the header, the column names and the
    data columns. Rows are not checked against the channel list unless the
    document is created with strict=True.
    """

    def __init__(self, strict: bool = False):
        """
        Args:
            strict: Reject rows whose length differs from the channel count
        """
        self.strict = strict
        self._creation_time: Optional[datetime] = None
        self._comment: Optional[str] = None
        self._channels: list[Channel] = []
        self._samples: list[SampleRow] = []

    @property
    def creation_time(self) -> Optional[datetime]:
        return self._creation_time

    @property
    def comment(self) -> Optional[str]:
        return self._comment

    @property
    def channels(self) -> tuple[Channel, ...]:
        return tuple(self._channels)

    @property
    def samples(self) -> tuple[SampleRow, ...]:
        return tuple(self._samples)

    def set_creation_time(self, creation_time: datetime) -> None:
        self._creation_time = creation_time

    def set_comment(self, comment: str) -> None:
        self._comment = comment

    def has_channel(self, name: AnyChannelName) -> bool:
        return any(c.name == name for c in self._channels)

    def add_channel(self, channel: Channel) -> None:
        """
        Append a channel.

        Raises:
            DuplicateChannelError: A channel with the same name already exists
        """
        if self.has_channel(channel.name):
            raise DuplicateChannelError(channel.name)
        self._channels.append(channel)

    def _check_row(self, row: SampleRow) -> None:
        if self.strict and len(row) != len(self._channels):
            raise ValueError(
                f"Sample has {len(row)} values but document has {len(self._channels)} channels"
            )

    def add_sample(self, row: Iterable[ChannelValue]) -> None:
        """Append one row of values, in channel order."""
        row = tuple(row)
        self._check_row(row)
        self._samples.append(row)

    def extend_samples(self, rows: Iterable[Iterable[ChannelValue]]) -> int:
        """
        Append several rows. Returns the number of rows added.

        In strict mode either every row is added or none is.
        """
        new_rows = [tuple(row) for row in rows]
        for row in new_rows:
            self._check_row(row)
        self._samples.extend(new_rows)
        logger.debug(f"Added {len(new_rows)} samples ({len(self._samples)} total)")
        return len(new_rows)
