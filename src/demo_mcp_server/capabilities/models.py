"""
Pydantic argument models for the server's capabilities.

Each model is the declared parameter schema of one tool or prompt. The
registry validates raw arguments against these models before a handler runs,
and publishes their JSON schema as the tool's inputSchema.
"""

from typing import Literal, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, ValidationInfo, field_validator


Language = Literal["ko", "en", "ja"]
Operation = Literal["add", "subtract", "multiply", "divide"]
TimeFormat = Literal["full", "date", "time", "iso"]
ReviewFocus = Literal["quality", "performance", "security", "style", "all"]
Number = Union[StrictInt, StrictFloat]


class GreetingArgs(BaseModel):
    """Input model for the greeting tool."""
    name: str = Field(..., description="Name of the person to greet")
    language: Language = Field("ko", description="Greeting language (ko, en, ja)")


class CalculatorArgs(BaseModel):
    """Input model for the calculator tool."""
    operation: Operation = Field(..., description="Arithmetic operation to perform")
    a: Number = Field(..., description="First operand")
    b: Number = Field(..., description="Second operand")


class TimeArgs(BaseModel):
    """Input model for the get_time tool."""
    model_config = ConfigDict(populate_by_name=True)

    # format is declared first so the zone check can see it
    format: TimeFormat = Field("full", description="Output format (full, date, time, iso)")
    time_zone: Optional[str] = Field(
        None,
        alias="timeZone",
        description="IANA time zone name (e.g., 'Asia/Seoul'); system zone when omitted, ignored for iso",
    )

    @field_validator("time_zone")
    @classmethod
    def _known_zone(cls, value: Optional[str], info: ValidationInfo) -> Optional[str]:
        if value is None or info.data.get("format") == "iso":
            return value
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            raise ValueError(f"Unknown time zone: {value}")
        return value


class ImageArgs(BaseModel):
    """Input model for the generate_image tool."""
    prompt: str = Field(..., description="Text description of the image to generate")


class CodeReviewArgs(BaseModel):
    """Input model for the code_review prompt."""
    code: str = Field(..., description="Source code to review")
    language: Optional[str] = Field(None, description="Programming language of the code")
    focus: ReviewFocus = Field("all", description="Review focus (quality, performance, security, style, all)")
