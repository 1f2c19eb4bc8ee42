from typing import List, Optional
from pydantic import BaseModel, Field, constr


# --- Scanner results ---

class DurationMatch(BaseModel):
    matched_text: str
    total_seconds: float = Field(..., description="Length in seconds; ranges use the lower bound")
    start: int = 0
    end: int = 0


class QuantityMatch(BaseModel):
    matched_text: str
    original_unit: str
    original_value: float
    converted_unit: Optional[str] = None  # Only set when metric conversion changed the unit
    converted_value: Optional[float] = None
    start: int = 0
    end: int = 0


# --- API payloads ---

class RenderRequest(BaseModel):
    markdown: str = Field(..., description="Recipe text in the supported Markdown subset")
    convert_to_metric: Optional[bool] = Field(
        default=None,
        description="Append metric equivalents to US quantities (defaults to server config)"
    )
    round_satisfying: Optional[bool] = Field(
        default=None,
        description="Round converted values to pleasing numbers (defaults to server config)"
    )


class RenderResponse(BaseModel):
    html: str


class AnnotateRequest(BaseModel):
    text: constr(min_length=1) = Field(..., description="A single line of recipe text")
    convert_to_metric: Optional[bool] = None
    round_satisfying: Optional[bool] = None


class AnnotateResponse(BaseModel):
    html: str
    quantities: List[QuantityMatch] = Field(default_factory=list)
    durations: List[DurationMatch] = Field(default_factory=list)
    ingredients: List[str] = Field(default_factory=list)


class ConvertRequest(BaseModel):
    value: float
    source_unit: constr(strip_whitespace=True, min_length=1) = Field(
        ..., description="Unit key or spelling, e.g. US_CUP or cups"
    )
    target_unit: Optional[str] = Field(default=None, description="Unit key or spelling to convert into")
    target_system: Optional[str] = Field(
        default=None,
        description="US or METRIC; used to pick the optimal unit when target_unit is omitted"
    )


class ConvertResponse(BaseModel):
    value: float
    unit: str
    display_name: str


class UnitInfo(BaseModel):
    key: str
    display_name: str
    measurement_system: str
    measurement_kind: str
    variations: List[str]
    liter_volume_factor: Optional[float] = None
    kilogram_mass_factor: Optional[float] = None
