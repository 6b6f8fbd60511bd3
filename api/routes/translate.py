"""Translation pass-through for meal names and instructions"""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_translation_service
from domain.schemas import TranslateRequest, TranslateResponse
from services import TranslationService

router = APIRouter(tags=["Translation"])
logger = logging.getLogger("dailymenu.api.translate")


@router.post("/translate", response_model=TranslateResponse)
def translate(body: TranslateRequest, translator: TranslationService = Depends(get_translation_service)):
    translations = translator.translate(body.texts, body.target_lang, body.source_lang)
    return TranslateResponse(translations=translations)
