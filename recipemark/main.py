from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from typing import List
import time
import uuid
from recipemark.models import (
    AnnotateRequest,
    AnnotateResponse,
    ConvertRequest,
    ConvertResponse,
    RenderRequest,
    RenderResponse,
    UnitInfo,
)
from recipemark.core.errors import RecipeMarkError
from recipemark.core.logging_config import get_logger, set_package_level
from recipemark.core.render_config import load_render_config
from recipemark.services.markdown_renderer import build_renderer
from recipemark.services.unit_catalog import default_catalog

app = FastAPI(title="Recipe Markdown Annotation API", version="0.1.0")
logger = get_logger(__name__)

config = load_render_config()
set_package_level(config.log_level)
renderer = build_renderer(config)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = str(uuid.uuid4())
    start = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start) * 1000.0
    logger.info(
        f"{request.method} {request.url.path} {response.status_code} "
        f"{duration_ms:.1f}ms request_id={request_id}"
    )
    response.headers["X-Request-ID"] = request_id
    return response

@app.exception_handler(RecipeMarkError)
async def recipemark_error_handler(request: Request, exc: RecipeMarkError):
    logger.error(f"{exc.error_code} on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=400,
        content={
            "error_code": exc.error_code,
            "message": exc.message
        }
    )

@app.get("/")
def read_root():
    return {"message": "Welcome to the Recipe Markdown Annotation API. Visit /docs for documentation."}


@app.post("/api/render", response_model=RenderResponse)
def render_markdown(request: RenderRequest):
    """
    Render recipe Markdown to HTML with quantity, duration and ingredient annotations.
    """
    html = renderer.render(
        request.markdown,
        convert_to_metric=request.convert_to_metric,
        round_satisfying=request.round_satisfying
    )
    return RenderResponse(html=html)


@app.post("/api/annotate", response_model=AnnotateResponse)
def annotate_text(request: AnnotateRequest):
    """
    Annotate a single line of recipe text and return the structured matches alongside the HTML.
    """
    metric = config.convert_to_metric if request.convert_to_metric is None else request.convert_to_metric
    rounding = config.round_satisfying if request.round_satisfying is None else request.round_satisfying
    return AnnotateResponse(
        html=renderer.annotate_item(request.text, metric, rounding),
        quantities=renderer.quantity_scanner.find(request.text, metric, rounding),
        durations=renderer.duration_scanner.find(request.text),
        ingredients=renderer.ingredient_matcher.find(request.text)
    )


@app.post("/api/convert", response_model=ConvertResponse)
def convert_quantity(request: ConvertRequest):
    """
    Convert a value between units. Without a target unit, the most readable unit of
    target_system (or of the source unit's own system) is chosen.
    """
    source = default_catalog.resolve(request.source_unit)
    if request.target_unit:
        target = default_catalog.resolve(request.target_unit)
    else:
        system = request.target_system.strip().upper() if request.target_system else None
        target = default_catalog.find_optimal_unit(request.value, source, system)
    value, unit = default_catalog.convert(request.value, source, target)
    return ConvertResponse(value=value, unit=unit.key, display_name=unit.display_name)


@app.get("/api/units", response_model=List[UnitInfo])
def list_units():
    return [
        UnitInfo(
            key=unit.key,
            display_name=unit.display_name,
            measurement_system=unit.measurement_system,
            measurement_kind=unit.measurement_kind,
            variations=sorted(unit.variations),
            liter_volume_factor=unit.liter_volume_factor,
            kilogram_mass_factor=unit.kilogram_mass_factor
        )
        for unit in default_catalog.definitions
    ]
