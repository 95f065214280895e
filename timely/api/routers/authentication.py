from fastapi import APIRouter, Depends, Form, status
from fastapi.responses import RedirectResponse

from timely.api.dependencies import get_auth_service
from timely.core.config import settings
from timely.features.authentication.services import AuthError, AuthService

router = APIRouter(tags=["auth"])


def _redirect_home() -> RedirectResponse:
    # 303 : le navigateur revient en GET après le POST du formulaire
    return RedirectResponse(url=f"{settings.ROOT_URL}/", status_code=status.HTTP_303_SEE_OTHER)


# -----------------------------
# Login (formulaire de la page d'accueil)
# -----------------------------
@router.post(
    "/login",
    summary="Se connecter",
    description="Vérifie le mot de passe et pose le cookie de session httpOnly. Redirige vers l'accueil dans tous les cas.",
    status_code=status.HTTP_303_SEE_OTHER,
)
def login(password: str = Form(""), svc: AuthService = Depends(get_auth_service)):
    response = _redirect_home()
    try:
        token = svc.log_in(password)
    except AuthError:
        # Échec : simple retour à l'accueil, qui réaffiche le formulaire
        return response
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        samesite=settings.AUTH_COOKIE_SAMESITE,
        secure=settings.AUTH_COOKIE_SECURE,
        max_age=int(svc.jwt.session_ttl.total_seconds()),
        path="/",
    )
    return response


# -----------------------------
# Logout
# -----------------------------
@router.get(
    "/logout",
    summary="Se déconnecter",
    status_code=status.HTTP_303_SEE_OTHER,
)
def logout():
    response = _redirect_home()
    response.delete_cookie(key=settings.AUTH_COOKIE_NAME, path="/")
    return response
