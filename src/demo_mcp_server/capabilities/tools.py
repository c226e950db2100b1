"""
Tool handlers

This module contains the tools exposed by the server:
- greeting: Language-specific greeting for a name
- calculator: Basic floating-point arithmetic
- get_time: Current wall-clock time, localized and annotated with its zone
- generate_image: Text-to-image generation through the Hugging Face inference API

Handlers receive validated argument models and return text, content blocks,
or raise an MCPServerError subclass.
"""
# region imports
import asyncio
import base64
import logging
import math
import re
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

import requests

from .models import CalculatorArgs, GreetingArgs, ImageArgs, TimeArgs
from ..config import Settings, get_settings
from ..errors import ConfigError, DomainError, GenerationError
from ..models import ImageContent
# endregion
# region globals and logging
logger = logging.getLogger(__name__)

GREETINGS = {
    "ko": "안녕하세요, {name}님! 👋",
    "en": "Hello, {name}! 👋",
    "ja": "こんにちは、{name}さん！👋",
}

OPERATION_SYMBOLS = {
    "add": "+",
    "subtract": "-",
    "multiply": "×",
    "divide": "÷",
}

SYSTEM_ZONE_LABEL = "system zone"
# endregion

# region Tool 1: Greeting
# ============================================================================
# Tool 1: Greeting
# ============================================================================

def greeting(args: GreetingArgs) -> str:
    """Return the greeting template for the requested language, filled with the name."""
    return GREETINGS[args.language].format(name=args.name)

# endregion
# region Tool 2: Calculator
# ============================================================================
# Tool 2: Calculator
# ============================================================================

def format_number(value: float) -> str:
    """Render a number the way JavaScript prints it: 42, 0.00001, 1e-7, 1e+21."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == int(value) and abs(value) < 1e21:
        return str(int(value))

    text = repr(value)
    # exponent form only below 1e-6; non-integral floats never reach 1e21
    if "e" in text and abs(value) >= 1e-6:
        text = format(Decimal(text), "f")
    return re.sub(r"e([+-])0*(\d)", r"e\1\2", text)


def calculator(args: CalculatorArgs) -> str:
    """
    Apply an arithmetic operation to two numbers.

    Returns:
        Text of the form "{a} {symbol} {b} = {result}"

    Raises:
        DomainError: On division by zero
    """
    a, b = args.a, args.b

    if args.operation == "add":
        result = a + b
    elif args.operation == "subtract":
        result = a - b
    elif args.operation == "multiply":
        result = a * b
    else:
        if b == 0:
            raise DomainError("Division by zero is not allowed", data={"operation": "divide"})
        result = a / b

    symbol = OPERATION_SYMBOLS[args.operation]
    return f"{format_number(a)} {symbol} {format_number(b)} = {format_number(result)}"

# endregion
# region Tool 3: Get Time
# ============================================================================
# Tool 3: Get Time
# ============================================================================

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _format_date_ko(moment: datetime) -> str:
    return f"{moment.year}. {moment.month}. {moment.day}."


def _format_time_ko(moment: datetime) -> str:
    meridiem = "오전" if moment.hour < 12 else "오후"
    hour = moment.hour % 12 or 12
    return f"{meridiem} {hour}:{moment.minute:02d}:{moment.second:02d}"


def format_iso(moment: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a Z suffix."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S") + f".{moment.microsecond // 1000:03d}Z"


def render_time(moment: datetime, fmt: str, time_zone: Optional[str] = None) -> str:
    """
    Render a moment in the ko-KR style for the given format.

    The iso format ignores time_zone and always renders UTC.
    """
    if fmt == "iso":
        return format_iso(moment)

    local = moment.astimezone(ZoneInfo(time_zone)) if time_zone else moment.astimezone()
    if fmt == "date":
        return _format_date_ko(local)
    if fmt == "time":
        return _format_time_ko(local)
    return f"{_format_date_ko(local)} {_format_time_ko(local)}"


def get_time(args: TimeArgs) -> str:
    """Return the current time rendered per format, annotated with the resolved zone."""
    if args.format == "iso":
        zone_label = "UTC"
    else:
        zone_label = args.time_zone or SYSTEM_ZONE_LABEL

    rendered = render_time(_utcnow(), args.format, args.time_zone)
    return f"🕐 Current time ({zone_label}): {rendered}"

# endregion
# region Tool 4: Generate Image
# ============================================================================
# Tool 4: Generate Image
# ============================================================================

async def generate_image(args: ImageArgs) -> ImageContent:
    """
    Generate an image (PNG unless the model answers otherwise) from a text prompt.

    The blocking HTTP call runs in the default executor so that other
    requests can be dispatched meanwhile.

    Returns:
        ImageContent with base64-encoded bytes and the returned image MIME type

    Raises:
        ConfigError: If HF_TOKEN is not configured
        GenerationError: If the inference call fails for any reason
    """
    settings = get_settings()
    if not settings.hf_token:
        raise ConfigError(
            "HF_TOKEN is not set. Add it to the environment or .env file to use generate_image.",
            data={"setting": "HF_TOKEN"},
        )

    loop = asyncio.get_running_loop()
    image_bytes, mime_type = await loop.run_in_executor(None, _generate_image_sync, args.prompt, settings)

    return ImageContent(
        data=base64.b64encode(image_bytes).decode("ascii"),
        mimeType=mime_type,
    )


def _error_detail(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return str(body)[:200]


def _generate_image_sync(prompt: str, settings: Settings) -> Tuple[bytes, str]:
    """
    Synchronous inference call (runs in executor).

    Returns:
        Raw image bytes and their MIME type
    """
    url = f"{settings.hf_inference_url.rstrip('/')}/{settings.hf_image_model}"
    logger.info(f"Requesting image from {settings.hf_image_model}")

    try:
        response = requests.post(
            url,
            headers={
                "Authorization": f"Bearer {settings.hf_token}",
                "Accept": "image/png",
            },
            json={"inputs": prompt},
            timeout=settings.hf_timeout_seconds,
        )
    except requests.exceptions.RequestException as e:
        logger.error(f"⚠️  Inference request failed: {e}")
        raise GenerationError(f"Image generation failed: {e}") from e

    if not response.ok:
        detail = _error_detail(response)
        logger.error(f"⚠️  Inference endpoint returned {response.status_code}: {detail}")
        raise GenerationError(
            f"Image generation failed: {response.status_code} {detail}",
            data={"status_code": response.status_code},
        )

    content_type = response.headers.get("Content-Type", "").split(";")[0].strip().lower()
    if not content_type.startswith("image/"):
        raise GenerationError(
            f"Image generation failed: unexpected content type '{content_type or 'unknown'}'"
        )

    logger.info(f"✅ Generated image ({len(response.content)} bytes)")
    return response.content, content_type

# endregion
