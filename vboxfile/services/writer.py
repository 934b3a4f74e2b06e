"""
VBOX file serializer.

Renders a VboxDocument as:

    File created on DD/MM/YYYY at HH:MM:SS

    [header]
    <channel> [<unit>]

    [comments]
    <comment>

    [column names]
    <name> <name>

    [data]
    <value> <value>

The [comments] section is only written when a comment is set. Column names
and data values are each followed by a single space, including the last one
on a line; existing VBOX readers expect that layout.
"""

import io
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO, Callable, TextIO, Union

from vboxfile.errors import SinkWriteError, TimeFormatError
from vboxfile.models.channel import render_channel_name
from vboxfile.models.document import VboxDocument
from vboxfile.models.values import ChannelValue


logger = logging.getLogger(__name__)

HEADER_DATE_PATTERN = "{0.day:02d}/{0.month:02d}/{0.year:04d}"
HEADER_TIME_PATTERN = "{0.hour:02d}:{0.minute:02d}:{0.second:02d}"

DEFAULT_ENCODING = os.getenv("VBOX_ENCODING", "utf-8")

Clock = Callable[[], datetime]
Sink = Union[TextIO, BinaryIO]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _format_creation_line(created: datetime) -> str:
    try:
        date = HEADER_DATE_PATTERN.format(created)
        time = HEADER_TIME_PATTERN.format(created)
    except (AttributeError, TypeError, ValueError) as e:
        raise TimeFormatError(created, e) from e
    return f"File created on {date} at {time}\n\n"


def _render_value(value: ChannelValue) -> str:
    if not isinstance(value, ChannelValue):
        raise TypeError(f"Sample values must be ChannelValue instances, got {type(value).__name__}")
    return value.render()


class _SinkWriter:
    """Wraps a text or binary sink and turns rejected writes into SinkWriteError."""

    def __init__(self, sink: Sink, encoding: str):
        self._sink = sink
        self._binary = isinstance(sink, (io.RawIOBase, io.BufferedIOBase))
        self._encoding = encoding

    def write(self, text: str) -> None:
        data = text.encode(self._encoding) if self._binary else text
        # ValueError: the stream is closed or detached
        try:
            self._sink.write(data)
        except (OSError, ValueError) as e:
            raise SinkWriteError(e) from e


def write_document(
    document: VboxDocument,
    sink: Sink,
    now: Clock = utc_now,
    encoding: str = DEFAULT_ENCODING,
) -> None:
    """
    Write a document to a text or binary sink.

    Args:
        document: Document to render
        sink: Writable stream; binary streams receive encoded bytes
        now: Time source used when the document has no creation time
        encoding: Encoding for binary sinks

    Raises:
        SinkWriteError: The sink rejected a write. Output written before the
            failure stays in the sink.
        TimeFormatError: The creation time or a Time value could not be formatted
    """
    out = _SinkWriter(sink, encoding)

    created = document.creation_time
    if created is None:
        created = now()
    out.write(_format_creation_line(created))

    out.write("[header]\n")
    for channel in document.channels:
        out.write(f"{channel}\n")
    out.write("\n")

    if document.comment is not None:
        out.write(f"[comments]\n{document.comment}\n\n")

    out.write("[column names]\n")
    out.write("".join(f"{render_channel_name(c.name)} " for c in document.channels))
    out.write("\n\n")

    out.write("[data]\n")
    for row in document.samples:
        out.write("".join(f"{_render_value(v)} " for v in row) + "\n")
    out.write("\n")

    logger.debug(
        f"Wrote VBOX document: {len(document.channels)} channels, {len(document.samples)} samples"
    )


def render_document(document: VboxDocument, now: Clock = utc_now) -> str:
    """Render a document to a string."""
    buffer = io.StringIO()
    write_document(document, buffer, now=now)
    return buffer.getvalue()


def save_document(
    document: VboxDocument,
    path: Path,
    newline: str = "\n",
    encoding: str = DEFAULT_ENCODING,
    now: Clock = utc_now,
) -> Path:
    """
    Write a document to a file.

    Args:
        document: Document to render
        path: Output file, overwritten if it exists
        newline: Line terminator, "\\n" or "\\r\\n"
        encoding: File encoding
        now: Time source used when the document has no creation time

    Returns:
        Path of the written file
    """
    if newline not in ("\n", "\r\n"):
        raise ValueError(f"Unsupported line ending: {newline!r}")

    path = Path(path)
    try:
        with open(path, "w", encoding=encoding, newline=newline) as f:
            write_document(document, f, now=now)
    except OSError as e:
        raise SinkWriteError(e) from e

    logger.info(f"Saved VBOX file: {path}")
    return path
