"""
FastAPI OAuth router: /login and /oauth.

Binds the authenticator's handlers to routes. The token exchange started by a
valid /oauth callback runs as a background task after the response is sent.
"""

from fastapi import APIRouter, BackgroundTasks, HTTPException, Request
from fastapi.responses import JSONResponse, RedirectResponse, Response
from starlette import status

from slack_oauth.authenticator import LOGIN_PATH, OAUTH_PATH, OAuthAuthenticator
from slack_oauth.errors import InvalidURL, OAuthError


def create_auth_router(authenticator: OAuthAuthenticator) -> APIRouter:
    """Create an APIRouter with the /login and /oauth endpoints."""
    router = APIRouter()

    @router.get(LOGIN_PATH)
    async def login():
        """Redirect to Slack's authorize page while an attempt is pending."""
        try:
            url = authenticator.handle_login()
        except InvalidURL as e:
            return JSONResponse({"error": str(e)}, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
        if url is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
        return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)

    @router.get(OAUTH_PATH, name="oauth_callback")
    async def oauth_callback(request: Request, background_tasks: BackgroundTasks):
        """Validate Slack's redirect and schedule the code exchange."""
        try:
            exchange = authenticator.handle_oauth(dict(request.query_params))
        except OAuthError as e:
            return JSONResponse({"error": e.error}, status_code=status.HTTP_400_BAD_REQUEST)
        if exchange is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")

        background_tasks.add_task(exchange.run)
        return Response(status_code=status.HTTP_202_ACCEPTED)

    return router
