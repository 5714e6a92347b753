from typing import Any, Dict

from fastapi.responses import JSONResponse

from globetrotter.core.errors import GlobeTrotterError


def _error_body(exc: GlobeTrotterError, *, include_debug: bool) -> Dict[str, Any]:
    body: Dict[str, Any] = {"error": exc.message}
    if include_debug and exc.debug:
        body["debug"] = exc.debug
    return body


def _error_response(exc: GlobeTrotterError, *, include_debug: bool) -> JSONResponse:
    """Render an application error; the model-output excerpt is opt-in."""

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc, include_debug=include_debug),
    )


def _merge_nested(trip: Dict[str, Any], stops: Any) -> Dict[str, Any]:
    """Attach the stop list (each with its activities) to a trip row."""

    return {**trip, "stops": stops or []}
