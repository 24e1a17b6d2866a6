# =============================================================================
# app/pipeline/pipeline.py - Ordered Request Pipeline
# =============================================================================
# Usage:
#   create_pipeline = Pipeline(
#       sanitize,
#       validate(*PRODUCT_CREATE_RULES),
#       authenticate,
#       require_roles(Role.USER, Role.ADMIN),
#   )
#
#   @router.post("")
#   async def create_product(request: Request):
#       return await create_pipeline.run(request, _create_product)
#
# Stages run in the order given. The first Halt wins; otherwise the handler
# runs. Exceptions are not caught here: they reach the error normalizer.
# =============================================================================

import logging

from fastapi import Request
from starlette.responses import Response

from .context import Halt, Handler, RequestContext, Stage

logger = logging.getLogger(__name__)


class Pipeline:
    """An explicit, ordered list of request stages."""

    def __init__(self, *stages: Stage):
        self.stages: tuple[Stage, ...] = stages

    def then(self, *stages: Stage) -> "Pipeline":
        """New pipeline with extra stages appended."""
        return Pipeline(*self.stages, *stages)

    async def run(self, request: Request, handler: Handler) -> Response:
        context = await RequestContext.from_request(request)
        if isinstance(context, Halt):
            return context.response

        for stage in self.stages:
            result = await stage(context)
            if isinstance(result, Halt):
                logger.debug(
                    f"{request.method} {request.url.path} halted by "
                    f"{getattr(stage, '__name__', stage)} ({result.response.status_code})"
                )
                return result.response

        return await handler(context)
