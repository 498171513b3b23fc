# ================== PREDICCIÓN (SERVICIO GEMINI) ==================
import base64
import os
import re
import sys

from google import genai
from google.genai import types

from config import API_KEY_ENV, GEMINI_MODEL, RECOGNITION_PROMPT, MSG_NO_API_KEY, MSG_NO_DIGIT

_DIGIT_RE = re.compile(r"[0-9]")


class RecognitionError(Exception):
    pass

class ConfigurationError(RecognitionError):
    """Falta la credencial: se detecta antes de cualquier llamada de red."""

class ServiceError(RecognitionError):
    """La llamada al servicio falló (red, cuota, respuesta inválida...)."""

class NoDigitError(RecognitionError):
    """El servicio respondió, pero sin ningún dígito."""


def extract_digit(text):
    """
    Primer carácter 0-9 del texto libre. Lanza NoDigitError si no hay ninguno.
    """
    match = _DIGIT_RE.search(text or "")
    if match is None:
        raise NoDigitError(MSG_NO_DIGIT)
    return match.group(0)


class GeminiDigitRecognizer:
    """
    Cliente de reconocimiento. La credencial se lee una sola vez, cuando hace
    falta por primera vez; el cliente del SDK se construye en ese momento y se
    reutiliza en las llamadas siguientes.
    """

    def __init__(self, api_key=None, model=GEMINI_MODEL, client_factory=genai.Client):
        self.model          = model
        self.client_factory = client_factory
        self._api_key       = api_key
        self._key_loaded    = api_key is not None
        self._client        = None

    def _get_client(self):
        if self._client is not None:
            return self._client
        if not self._key_loaded:
            self._api_key    = os.getenv(API_KEY_ENV) or None
            self._key_loaded = True
        if not self._api_key:
            raise ConfigurationError(MSG_NO_API_KEY)
        self._client = self.client_factory(api_key=self._api_key)
        return self._client

    def build_contents(self, png_base64):
        image_part = types.Part.from_bytes(data=base64.b64decode(png_base64),
                                           mime_type="image/png")
        return [image_part, RECOGNITION_PROMPT]

    def recognize(self, png_base64):
        """PNG en base64 -> dígito como str ("0".."9")."""
        client = self._get_client()
        try:
            response = client.models.generate_content(
                model=self.model,
                contents=self.build_contents(png_base64),
            )
        except Exception as e:
            print(f"Error reconociendo el dígito: {e}", file=sys.stderr)
            raise ServiceError(str(e) or type(e).__name__) from e
        return extract_digit(response.text)
