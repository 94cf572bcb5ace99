"""
Hard failures of the roadmap pipeline.

Each class carries a stable error_code and the HTTP status the server answers
with, so callers can tell the failure reasons apart.
"""


class RoadmapError(Exception):
    error_code = "ROADMAP_ERROR"
    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error_code": self.error_code, "message": self.message}


class ResolutionError(RoadmapError):
    """No course prefixes (or no courses under them) for the program/institution pair."""

    error_code = "NO_RELEVANT_COURSES"
    http_status = 422


class CatalogUnavailable(RoadmapError):
    """Catalog or credential data could not be read or came back empty."""

    error_code = "CATALOG_UNAVAILABLE"
    http_status = 503


class GenerationParseError(RoadmapError):
    """Model output is not JSON or does not have the plan shape."""

    error_code = "GENERATION_PARSE_ERROR"
    http_status = 502


class GenerationUnavailable(RoadmapError):
    """The model provider raised or could not be configured."""

    error_code = "GENERATION_UNAVAILABLE"
    http_status = 502
