"""
API routes for rendering VBOX documents.
"""

import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse

from vboxfile.api.schemas import (
    CoordinatesValue,
    DocumentRequest,
    ErrorResponse,
    HeadingValue,
    HeightValue,
    SatellitesValue,
    TimeValue,
    VelocityValue,
)
from vboxfile.errors import DuplicateChannelError, TimeFormatError
from vboxfile.models.channel import Channel
from vboxfile.models.document import VboxDocument
from vboxfile.models.values import (
    ChannelValue,
    Coordinates,
    Heading,
    Height,
    Satellites,
    Time,
    Velocity,
)
from vboxfile.services.writer import render_document
from vboxfile.utils.coordinates import DMS


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


def _to_channel_value(value) -> ChannelValue:
    """Convert a request value object to its ChannelValue."""
    if isinstance(value, SatellitesValue):
        return Satellites(value.value)
    if isinstance(value, TimeValue):
        return Time(value.value)
    if isinstance(value, CoordinatesValue):
        return Coordinates(DMS(value.degrees, value.minutes, value.seconds, value.bearing))
    if isinstance(value, VelocityValue):
        return Velocity(value.value)
    if isinstance(value, HeadingValue):
        return Heading(value.value)
    if isinstance(value, HeightValue):
        return Height(value.value)
    raise TypeError(f"Unsupported value: {value!r}")


def _build_document(request: DocumentRequest) -> VboxDocument:
    """Build a VboxDocument from a request, in request order."""
    document = VboxDocument(strict=request.strict)
    if request.created_at is not None:
        document.set_creation_time(request.created_at)
    if request.comment is not None:
        document.set_comment(request.comment)
    for channel in request.channels:
        document.add_channel(Channel.of(channel.name, channel.unit))
    document.extend_samples(
        [_to_channel_value(v) for v in row] for row in request.samples
    )
    return document


@router.post(
    "/render",
    response_class=PlainTextResponse,
    responses={400: {"model": ErrorResponse}},
)
async def render(request: DocumentRequest):
    """
    Render a document as VBOX file text.

    When created_at is omitted the current UTC time is used.
    """
    try:
        document = _build_document(request)
        text = render_document(document)
    except DuplicateChannelError as e:
        raise HTTPException(status_code=400, detail=f"Duplicate channel: {e.name}")
    except TimeFormatError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(
        f"Rendered document: {len(document.channels)} channels, {len(document.samples)} samples"
    )
    return PlainTextResponse(text)
