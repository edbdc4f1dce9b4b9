"""Markdown preview endpoint."""

from fastapi import APIRouter

from ..models import PreviewRequest, PreviewResponse
from ..services.markdown import render_markdown

router = APIRouter(tags=["preview"])


@router.post("/preview", response_model=PreviewResponse)
async def preview(request: PreviewRequest):
    """Render arbitrary markdown, e.g. an unsaved draft."""
    return PreviewResponse(html=render_markdown(request.markdown))
