"""
Tests del cliente de reconocimiento (SDK de Gemini simulado)
"""

import base64
import os
import sys
import unittest
from unittest import mock

from google.genai import types

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from config import API_KEY_ENV, GEMINI_MODEL, RECOGNITION_PROMPT, MSG_NO_API_KEY, MSG_NO_DIGIT
from predict import (GeminiDigitRecognizer, ConfigurationError, ServiceError,
                     NoDigitError, RecognitionError, extract_digit)

PAYLOAD = base64.b64encode(b"\x89PNG\r\n\x1a\nfake").decode("ascii")

def fake_factory(text="7"):
    client = mock.MagicMock()
    client.models.generate_content.return_value = mock.MagicMock(text=text)
    return mock.MagicMock(return_value=client), client

class TestExtractDigit(unittest.TestCase):

    def test_single_digit(self):
        self.assertEqual(extract_digit("7"), "7")

    def test_first_digit_in_sentence(self):
        self.assertEqual(extract_digit("The digit is 3."), "3")
        self.assertEqual(extract_digit(" 8 or maybe 9\n"), "8")

    def test_no_digit(self):
        with self.assertRaises(NoDigitError) as ctx:
            extract_digit("no digits here")
        self.assertEqual(str(ctx.exception), MSG_NO_DIGIT)

    def test_empty_response(self):
        with self.assertRaises(NoDigitError):
            extract_digit(None)

class TestGeminiDigitRecognizer(unittest.TestCase):

    def test_returns_digit(self):
        factory, client = fake_factory("7")
        recognizer = GeminiDigitRecognizer(api_key="k", client_factory=factory)
        self.assertEqual(recognizer.recognize(PAYLOAD), "7")
        factory.assert_called_once_with(api_key="k")
        kwargs = client.models.generate_content.call_args.kwargs
        self.assertEqual(kwargs["model"], GEMINI_MODEL)

    def test_extracts_from_free_text(self):
        factory, _ = fake_factory("The digit is 3.")
        recognizer = GeminiDigitRecognizer(api_key="k", client_factory=factory)
        self.assertEqual(recognizer.recognize(PAYLOAD), "3")

    def test_no_digit_is_not_service_error(self):
        factory, _ = fake_factory("no digits here")
        recognizer = GeminiDigitRecognizer(api_key="k", client_factory=factory)
        with self.assertRaises(NoDigitError) as ctx:
            recognizer.recognize(PAYLOAD)
        self.assertNotIsInstance(ctx.exception, ServiceError)

    def test_missing_credential(self):
        factory, client = fake_factory("7")
        with mock.patch.dict(os.environ, {}, clear=True):
            recognizer = GeminiDigitRecognizer(client_factory=factory)
            with self.assertRaises(ConfigurationError) as ctx:
                recognizer.recognize(PAYLOAD)
        self.assertEqual(str(ctx.exception), MSG_NO_API_KEY)
        factory.assert_not_called()
        client.models.generate_content.assert_not_called()

    def test_credential_from_environment_read_once(self):
        factory, client = fake_factory("1")
        with mock.patch.dict(os.environ, {API_KEY_ENV: "env-key"}):
            recognizer = GeminiDigitRecognizer(client_factory=factory)
            recognizer.recognize(PAYLOAD)
            os.environ[API_KEY_ENV] = "other-key"
            recognizer.recognize(PAYLOAD)
        factory.assert_called_once_with(api_key="env-key")
        self.assertEqual(client.models.generate_content.call_count, 2)

    def test_service_error_wrapped(self):
        factory, client = fake_factory()
        client.models.generate_content.side_effect = RuntimeError("quota exceeded")
        recognizer = GeminiDigitRecognizer(api_key="k", client_factory=factory)
        with self.assertRaises(ServiceError) as ctx:
            recognizer.recognize(PAYLOAD)
        self.assertEqual(str(ctx.exception), "quota exceeded")
        self.assertIsInstance(ctx.exception.__cause__, RuntimeError)
        self.assertIsInstance(ctx.exception, RecognitionError)

    def test_request_contents(self):
        recognizer = GeminiDigitRecognizer(api_key="k", client_factory=mock.MagicMock())
        image_part, prompt = recognizer.build_contents(PAYLOAD)
        self.assertIsInstance(image_part, types.Part)
        self.assertEqual(image_part.inline_data.mime_type, "image/png")
        self.assertEqual(image_part.inline_data.data, base64.b64decode(PAYLOAD))
        self.assertEqual(prompt, RECOGNITION_PROMPT)

if __name__ == '__main__':
    unittest.main()
