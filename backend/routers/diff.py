"""Diff parsing and noise filtering API endpoints"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException
from sse_starlette.sse import EventSourceResponse

from models.filter import FilterRequest, FilterResponse, ParseResponse, StreamEvent
from services.diff_parser import DiffParseError, parse_file_diffs
from services.diff_serializer import render_file_diff
from services.noise_filter import NoiseFilter, collect_stats

logger = logging.getLogger(__name__)

router = APIRouter()
noise_filter = NoiseFilter()


def _parse_or_400(diff_text: str):
    try:
        return parse_file_diffs(diff_text)
    except DiffParseError as e:
        logger.warning("Rejected diff: %s", e)
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/parse", response_model=ParseResponse)
async def parse_diff(request: FilterRequest) -> ParseResponse:
    """Return the structured file/hunk/block tree of a unified diff"""
    return ParseResponse(files=_parse_or_400(request.diff))


@router.post("/filter", response_model=FilterResponse)
async def filter_diff(request: FilterRequest) -> FilterResponse:
    """Drop mechanical-rename noise from a unified diff"""
    try:
        return noise_filter.filter_diff(request.diff)
    except DiffParseError as e:
        logger.warning("Rejected diff: %s", e)
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/filter/stream")
async def filter_diff_stream(request: FilterRequest):
    """Filter a unified diff and stream surviving files as SSE events"""
    # Parse up front so malformed input fails before the stream starts
    file_diffs = _parse_or_400(request.diff)

    async def event_generator():
        filtered = []
        for file_diff in file_diffs:
            kept = noise_filter.filter_file_diff(file_diff)
            if kept is None:
                continue
            filtered.append(kept)
            event = StreamEvent(type="file", path=kept.path, chunk=render_file_diff(kept))
            yield {"event": "message", "data": event.model_dump_json()}

        event = StreamEvent(type="done", done=True, stats=collect_stats(file_diffs, filtered))
        yield {"event": "message", "data": event.model_dump_json()}

    return EventSourceResponse(event_generator())
