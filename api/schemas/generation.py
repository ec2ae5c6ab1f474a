"""
Generation API Schemas

Pydantic models for request validation. Required fields are optional at the
schema level so the routes can answer 400 with the service's own message.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, Field

from core.generation.book_orchestrator import DEFAULT_OUTLINE, OUTLINE_CHAPTER_LENGTH
from core.generation.models import ChapterOutline, ContentType


class GenerateContentRequest(BaseModel):
    prompt: Optional[str] = Field(None, description="Prompt text")
    type: ContentType = Field(ContentType.GENERAL, description="Content type tag")
    provider: Optional[str] = Field(None, description="Preferred provider")

    class Config:
        json_schema_extra = {
            "example": {
                "prompt": "Write a short essay about lighthouses.",
                "type": "general",
                "provider": "claude",
            }
        }


class GenerateSnippetRequest(BaseModel):
    topic: Optional[str] = Field(None, max_length=500)
    provider: Optional[str] = None


class ChapterOutlineIn(BaseModel):
    title: str = Field(..., min_length=1, max_length=300)
    outline: Optional[str] = None
    keyPoints: List[str] = Field(default_factory=list)
    length: Optional[str] = None


class GenerateBookRequest(BaseModel):
    title: Optional[str] = Field(None, max_length=200)
    genre: Optional[str] = None
    style: Optional[str] = "engaging"
    audience: Optional[str] = "general"
    chapters: Optional[List[Union[str, ChapterOutlineIn]]] = None

    class Config:
        json_schema_extra = {
            "example": {
                "title": "The AI Revolution",
                "genre": "Non-fiction",
                "chapters": ["Introduction", "The Rise of AI", "Future Implications"],
            }
        }

    def to_outline(self) -> List[ChapterOutline]:
        outline: List[ChapterOutline] = []
        for index, entry in enumerate(self.chapters or [], start=1):
            if isinstance(entry, str):
                title, text, points, length = entry, None, [], None
            else:
                title, text, points, length = entry.title, entry.outline, entry.keyPoints, entry.length
            outline.append(ChapterOutline(
                title=title,
                outline=text or DEFAULT_OUTLINE.format(index=index, title=title),
                key_points=list(points),
                length=length or OUTLINE_CHAPTER_LENGTH,
            ))
        return outline
