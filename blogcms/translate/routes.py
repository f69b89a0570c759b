from fastapi import APIRouter, Depends, Request

from blogcms.core.errors import ValidationError
from blogcms.models.schemas import TranslateRequest, TranslateResponse
from blogcms.translate.client import DeepLTranslator

router = APIRouter()


def get_translator(request: Request) -> DeepLTranslator:
    return request.app.state.translator


@router.post("/translate", response_model=TranslateResponse)
async def translate(payload: TranslateRequest, translator: DeepLTranslator = Depends(get_translator)):
    if not payload.text or not payload.target_lang:
        raise ValidationError("Both text and target_lang are required")
    translated = await translator.translate(payload.text, payload.target_lang)
    return {"translatedText": translated}
