import math

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class Channel(BaseModel):
    """Channel identity and display metadata"""
    model_config = ConfigDict(extra="allow")

    id: int | str = Field(..., description="Channel ID")
    number: int | str | None = Field(None, description="Channel number shown in the guide")
    name: str | None = Field(None, description="Display name of the channel")
    description: str | None = Field(None, description="Channel description")


class Program(BaseModel):
    """Program entry with optional grid coordinates derived from the axis

    Instants are accepted as any JSON number, including fractional and
    non-finite values, so one odd record never rejects the whole document.
    """
    model_config = ConfigDict(extra="allow")

    id: int | str | None = Field(None, description="Program ID")
    name: str | None = Field(None, description="Program title")
    description: str | None = Field(None, description="Program description")
    start_time: int | float = Field(..., description="Start instant in epoch milliseconds")
    end_time: int | float = Field(..., description="End instant in epoch milliseconds")
    duration: int | float | None = Field(None, description="Duration in minutes as reported by the source")
    truncated_right: bool | None = Field(None, description="Source flag, passed through unchanged")
    grid_column_start: int | None = Field(None, description="Index of the axis slot the program starts in")
    normalized_duration: int | None = Field(None, description="Program width in whole slots (at least 1)")

    @field_serializer("start_time", "end_time", "duration", when_used="json")
    def serialize_number(self, value: int | float | None) -> int | float | None:
        """Emit non-finite numbers as null; JSON has no NaN or Infinity."""
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return value


class ChannelRow(BaseModel):
    """Single channel and its programs, ordered by start time"""
    model_config = ConfigDict(extra="allow")

    channel: Channel
    programs: list[Program] = Field(default_factory=list)


class GuideDocument(BaseModel):
    """Guide document as served by the upstream source"""
    start_time: int = Field(..., description="Axis start in epoch milliseconds")
    end_time: int = Field(..., description="Axis end in epoch milliseconds")
    rows: list[ChannelRow] = Field(default_factory=list)


class GuideLayout(GuideDocument):
    """Guide document annotated with grid coordinates and axis labels"""
    axis: list[str] = Field(..., description="HH:MM label for each slot boundary")
    column_count: int = Field(..., description="Number of grid columns (equals the axis label count)")
    slot_interval_minutes: int = Field(..., description="Length of a single grid column")
    fetched_at: str | None = Field(None, description="ISO8601 time the document was retrieved")


class ErrorDetail(BaseModel):
    """Standard error detail"""
    code: str = Field(..., description="Error code (e.g., 'GUIDE_UNAVAILABLE', 'REFRESH_FAILED')")
    message: str = Field(..., description="Human-readable error message")
    context: dict | None = Field(None, description="Additional context about the error")


class StandardErrorResponse(BaseModel):
    """Standardized error response for all endpoints"""
    status: str = Field("error", description="Status indicator")
    timestamp: str = Field(..., description="ISO8601 timestamp of error")
    error: ErrorDetail = Field(..., description="Error details")
