"""HTTP surface helpers shared by the onboarding and ordering APIs."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from shared.errors import ErrorCode, LifecycleError, http_status_for

ACTOR_HEADER = "X-Account-Id"


def lifecycle_error_response(exc: LifecycleError) -> JSONResponse:
    return JSONResponse(
        status_code=http_status_for(exc.code),
        content={"error": exc.messages, "code": exc.code.value},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install Protean's exception mapping plus the lifecycle error codes."""
    register_exception_handlers(app)

    @app.exception_handler(LifecycleError)
    async def handle_lifecycle_error(request: Request, exc: LifecycleError) -> JSONResponse:
        return lifecycle_error_response(exc)


def require_actor(account_id: str | None) -> str:
    """Return the acting account id taken from the request, or fail as anonymous."""
    if not account_id:
        raise LifecycleError(
            ErrorCode.NOT_AUTHENTICATED,
            f"Missing {ACTOR_HEADER} header",
            field="account",
        )
    return account_id
