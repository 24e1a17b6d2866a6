# =============================================================================
# app/pipeline/ - Request Processing Pipeline
# =============================================================================
# Every API route runs an explicit, ordered list of stages before its handler:
#
#   sanitize -> validate(rules) -> authenticate -> require_roles(...) -> handler
#
# - context.py: RequestContext, Continue / Halt stage results
# - pipeline.py: Pipeline runner
# - sanitizer.py: Trim + HTML-escape string inputs
# - validator.py: FieldRule and its checks
# - auth.py: Bearer token authentication, role authorization
# - rules.py: Rule sets for each route
#
# Failures raised by handlers are not handled here; see app/exceptions.py.
# =============================================================================

from .auth import authenticate, require_roles
from .context import CONTINUE, Continue, Halt, RequestContext, StageResult
from .pipeline import Pipeline
from .sanitizer import sanitize
from .validator import FieldRule, Location, validate

__all__ = [
    "CONTINUE",
    "Continue",
    "FieldRule",
    "Halt",
    "Location",
    "Pipeline",
    "RequestContext",
    "StageResult",
    "authenticate",
    "require_roles",
    "sanitize",
    "validate",
]
