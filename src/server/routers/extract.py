"""Extract endpoint for the API."""

from __future__ import annotations

from fastapi import APIRouter, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from javadoc2anki.exceptions import ExtractionError, NotAChildError, ParseError
from javadoc2anki.markdown import convert_source_to_markdown
from javadoc2anki.utils.logging_config import get_logger
from server.models import ErrorResponse, ExtractRequest, ExtractResponse

logger = get_logger(__name__)

UNPROCESSABLE_CONTENT = 422

router = APIRouter()


@router.post(
    "/api/extract",
    response_model=ExtractResponse,
    responses={
        UNPROCESSABLE_CONTENT: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
async def api_extract(extract_request: ExtractRequest) -> ExtractResponse | JSONResponse:
    """Convert the documentation comments of Java source to Markdown.

    **Parameters**

    - **extract_request** (`ExtractRequest`): the Java source text

    **Returns**

    - **ExtractResponse**: the Markdown document
    - **JSONResponse**: **422** if the source is malformed or nested too deeply,
      **500** if the syntax tree is inconsistent

    """
    try:
        markdown = await run_in_threadpool(convert_source_to_markdown, extract_request.source)
    except NotAChildError as exc:
        logger.exception("Inconsistent syntax tree", extra={"error": str(exc)})
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(error=str(exc)).model_dump(),
        )
    except (ParseError, ExtractionError) as exc:
        logger.warning("Extraction failed", extra={"error": str(exc)})
        return JSONResponse(
            status_code=UNPROCESSABLE_CONTENT,
            content=ErrorResponse(error=str(exc)).model_dump(),
        )
    return ExtractResponse(markdown=markdown)
