"""
Content and book generation endpoints.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from api.deps import get_book_orchestrator, get_provider_manager
from api.rate_limiter import limiter, rate_limit_config
from api.schemas.generation import (
    GenerateBookRequest,
    GenerateContentRequest,
    GenerateSnippetRequest,
)
from config.logging_config import get_logger
from core.generation.book_orchestrator import BookOrchestrator
from core.generation.exceptions import GenerationError
from core.generation.models import BookSpec, ContentType
from core.generation.provider_manager import ProviderManager

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Generation"])

TEST_PROMPT = "Write a single paragraph about the future of AI in publishing."


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": message})


def _generation_failed(error: Exception, manager: ProviderManager) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": str(error),
            "providers": manager.get_provider_status(),
        },
    )


def _check_provider(name, manager: ProviderManager):
    if name is not None and name not in manager.providers:
        return _bad_request(
            f"Unknown provider '{name}'. Choose one of: {', '.join(manager.providers)}"
        )
    return None


@router.get("/test-ai")
@limiter.limit(rate_limit_config.get_limit("test_ai"))
async def test_ai(
    request: Request,
    manager: ProviderManager = Depends(get_provider_manager),
):
    """Test AI connectivity with a short generation."""
    try:
        result = await manager.generate_content(TEST_PROMPT, content_type=ContentType.TEST)
    except GenerationError as e:
        return _generation_failed(e, manager)

    return {
        "success": True,
        "result": result.to_dict(),
        "message": "AI test successful!",
    }


@router.post("/generate-content")
@limiter.limit(rate_limit_config.get_limit("generate_content"))
async def generate_content(
    request: Request,
    body: GenerateContentRequest,
    manager: ProviderManager = Depends(get_provider_manager),
):
    """Generate a single content piece with automatic failover."""
    if not body.prompt or not body.prompt.strip():
        return _bad_request("Prompt is required")
    invalid = _check_provider(body.provider, manager)
    if invalid is not None:
        return invalid

    try:
        result = await manager.generate_content(
            body.prompt,
            content_type=body.type,
            provider=body.provider,
        )
    except GenerationError as e:
        return _generation_failed(e, manager)

    return {"success": True, "result": result.to_dict()}


@router.post("/generate-snippet")
@limiter.limit(rate_limit_config.get_limit("generate_snippet"))
async def generate_snippet(
    request: Request,
    body: GenerateSnippetRequest,
    manager: ProviderManager = Depends(get_provider_manager),
):
    """Generate a short introduction about a topic."""
    if not body.topic or not body.topic.strip():
        return _bad_request("Topic is required")
    invalid = _check_provider(body.provider, manager)
    if invalid is not None:
        return invalid

    try:
        result = await manager.generate_snippet(body.topic, provider=body.provider)
    except GenerationError as e:
        return _generation_failed(e, manager)

    return {"success": True, "result": result.to_dict()}


@router.post("/generate-book")
@limiter.limit(rate_limit_config.get_limit("generate_book"))
async def generate_book(
    request: Request,
    body: GenerateBookRequest,
    orchestrator: BookOrchestrator = Depends(get_book_orchestrator),
):
    """Generate a complete book, one chapter at a time."""
    if not body.title or not body.chapters:
        return _bad_request("Title and chapters are required")

    book_spec = BookSpec.from_request(
        body.title, genre=body.genre, style=body.style, audience=body.audience,
    )
    outline = body.to_outline()

    try:
        book = await orchestrator.generate_book(book_spec, outline)
    except GenerationError as e:
        logger.error("Book generation error: %s", e)
        return _generation_failed(e, orchestrator.manager)

    return {
        "success": True,
        "book": book.to_dict(),
        "message": f'Book "{book.title}" generated successfully!',
    }
