from typing import Callable, Optional

from fastapi import Depends, Request, Response
from fastapi.routing import APIRoute
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..errors import AuthError
from ..services.tokens import TokenService, get_token_service

bearer_scheme = HTTPBearer(auto_error=False)


def _authenticate(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials],
    tokens: TokenService,
) -> int:
    user_id = getattr(request.state, "user_id", None)
    if user_id is not None:
        return user_id

    if credentials is None or not credentials.credentials:
        raise AuthError("No token provided")

    user_id = tokens.verify(credentials.credentials)
    if user_id is None:
        raise AuthError("Invalid or expired token")

    request.state.user_id = user_id
    return user_id


class AuthenticatedRoute(APIRoute):
    """Route that checks the bearer token before the request body is read.

    Without this a protected route with a malformed body would answer 400
    instead of 401.
    """

    def get_route_handler(self) -> Callable:
        handler = super().get_route_handler()

        async def authenticated_handler(request: Request) -> Response:
            provider = request.app.dependency_overrides.get(get_token_service, get_token_service)
            _authenticate(request, await bearer_scheme(request), provider())
            return await handler(request)

        return authenticated_handler


async def get_current_user_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> int:
    """Resolve the caller from an ``Authorization: Bearer <token>`` header.

    The id is also stored on ``request.state.user_id`` for anything else that
    runs during the request.
    """
    return _authenticate(request, credentials, tokens)
