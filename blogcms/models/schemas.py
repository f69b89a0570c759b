from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

PRIMARY_LANG = "pl"
ENGLISH_LANG = "en"


class BlogWrite(BaseModel):
    """Fields accepted by create and update (already parsed from the form)."""
    title: str
    content: str
    titleEng: Optional[str] = None
    contentEng: Optional[str] = None
    tags: List[str] = []


class BlogPost(BaseModel):
    id: str
    title: str
    content: str
    titleEng: Optional[str] = None
    contentEng: Optional[str] = None
    image: Optional[str] = None
    tags: List[str] = []
    createdAt: datetime
    updatedAt: datetime

    def localized(self, lang: str) -> Dict[str, Optional[str]]:
        """Title and content in one language, keyed by field name."""
        if lang == ENGLISH_LANG:
            return {"title": self.titleEng, "content": self.contentEng}
        return {"title": self.title, "content": self.content}

    def translations(self) -> Dict[str, Dict[str, Optional[str]]]:
        return {lang: self.localized(lang) for lang in (PRIMARY_LANG, ENGLISH_LANG)}


class MessageResponse(BaseModel):
    message: str


class TranslateRequest(BaseModel):
    text: Optional[str] = None
    target_lang: Optional[str] = None


class TranslateResponse(BaseModel):
    translatedText: str


class ErrorResponse(BaseModel):
    error: str
    message: str = Field(..., description="Short human readable description")
