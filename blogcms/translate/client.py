"""
DeepL API client wrapper
"""
import logging
from typing import Optional

import httpx

from blogcms.core.config import Settings
from blogcms.core.errors import server_error

logger = logging.getLogger(__name__)


class DeepLTranslator:
    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        # tests pass an httpx.MockTransport here
        self.transport = transport

    async def translate(self, text: str, target_lang: str) -> str:
        """
        Translate ``text`` into ``target_lang`` and return the first translation.
        """
        url = f"{self.settings.deepl_api_url.rstrip('/')}/v2/translate"
        headers = {"Authorization": f"DeepL-Auth-Key {self.settings.deepl_api_key}"}
        payload = {"text": [text], "target_lang": target_lang.upper()}

        try:
            async with httpx.AsyncClient(transport=self.transport, timeout=self.settings.translate_timeout) as client:
                response = await client.post(url, json=payload, headers=headers)
                response.raise_for_status()
                translations = response.json().get("translations", [])
            return translations[0]["text"]
        except (httpx.HTTPError, ValueError, LookupError, TypeError, AttributeError) as e:
            raise server_error(e, "Translation")
