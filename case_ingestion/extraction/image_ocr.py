import base64

from case_ingestion.extraction.exceptions import OcrError, OcrTimeoutError
from case_ingestion.llm.exceptions import LLMError, RequestTimeoutError
from case_ingestion.llm.invoker import LLMInvoker
from case_ingestion.logging.logger import Log

# (signature, offset, mime). WEBP is RIFF....WEBP, checked separately.
_SIGNATURES: tuple[tuple[bytes, int, str], ...] = (
    (b"\x89PNG\r\n\x1a\n", 0, "image/png"),
    (b"\xff\xd8\xff", 0, "image/jpeg"),
    (b"GIF87a", 0, "image/gif"),
    (b"GIF89a", 0, "image/gif"),
    (b"BM", 0, "image/bmp"),
    (b"II*\x00", 0, "image/tiff"),
    (b"MM\x00*", 0, "image/tiff"),
)

OCR_PROMPT = (
    "This is a scanned document or screenshot submitted as evidence in a tax "
    "complaint. Transcribe ALL text in the image verbatim. Preserve every date, "
    "monetary amount and reference number exactly as written, keep the original "
    "line order, and do not summarise, translate or add commentary. If the "
    "image contains no text, reply with [No text found]."
)


def detect_image_mime(data: bytes) -> str:
    """Identify the image type from its magic number; unknown -> image/png."""
    if len(data) >= 12 and data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    for signature, offset, mime in _SIGNATURES:
        if data[offset:offset + len(signature)] == signature:
            return mime
    return "image/png"


def to_data_uri(data: bytes, mime: str) -> str:
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"


class ImageOcrReader:
    """Transcribes images through a vision-capable model."""

    def __init__(
        self,
        invoker: LLMInvoker,
        *,
        timeout_seconds: float,
        temperature: float = 0.1,
        max_tokens: int = 4000,
    ) -> None:
        self._invoker = invoker
        self._timeout_seconds = timeout_seconds
        self._temperature = temperature
        self._max_tokens = max_tokens

    def extract(self, data: bytes) -> str:
        """Return the transcription.

        Raises:
            OcrTimeoutError: the vision call exceeded its timeout.
            OcrError: any other OCR failure, including an empty transcription.
        """
        mime = detect_image_mime(data)
        Log.info(f"Running OCR on {len(data)} byte {mime} image")
        try:
            text = self._invoker.transcribe_image(
                OCR_PROMPT,
                to_data_uri(data, mime),
                temperature=self._temperature,
                max_tokens=self._max_tokens,
                timeout_seconds=self._timeout_seconds,
            )
        except RequestTimeoutError as exc:
            raise OcrTimeoutError(
                f"OCR timed out after {self._timeout_seconds}s: {exc}"
            ) from exc
        except LLMError as exc:
            raise OcrError(str(exc)) from exc

        text = text.strip()
        if not text:
            raise OcrError("vision model returned no text")
        return text
