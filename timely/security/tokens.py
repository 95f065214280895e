import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TypedDict

from jose import jwt, JWTError

# ==========================================================
# 🔧 Configuration : paramètres de génération/validation JWT
# ==========================================================

@dataclass(frozen=True)
class JWTSettings:
    """
    Configuration du jeton de session.

    - `secret` : clé secrète pour signer/valider les tokens
    - `issuer` : émetteur (utilisé dans le payload)
    - `algorithm` : algo de signature (HS256 recommandé)
    - `session_ttl` : durée de vie d’une session web
    """
    secret: str
    issuer: str = "timely"
    algorithm: str = "HS256"
    session_ttl: timedelta = timedelta(days=30)


# ==========================================================
# 🧱 Types
# ==========================================================

class DecodedToken(TypedDict, total=False):
    iss: str
    sub: str            # toujours "owner" : une seule personne possède la liste
    typ: str            # "session"
    jti: str
    iat: int
    exp: int


SESSION_SUBJECT = "owner"
SESSION_TYPE = "session"


# ==========================================================
# 🧩 Fonctions utilitaires
# ==========================================================

def _now() -> datetime:
    """Renvoie l'heure UTC actuelle."""
    return datetime.now(timezone.utc)

def new_jti() -> str:
    """Crée un identifiant unique pour un token."""
    return str(uuid.uuid4())


# ==========================================================
# 🎟️ Génération du token
# ==========================================================

def create_session_token(*, settings: JWTSettings, now: datetime | None = None) -> str:
    """
    Crée le jeton de session posé en cookie après un login réussi.
    """
    now = now or _now()
    payload: DecodedToken = {
        "iss": settings.issuer,
        "sub": SESSION_SUBJECT,
        "typ": SESSION_TYPE,
        "jti": new_jti(),
        "iat": int(now.timestamp()),
        "exp": int((now + settings.session_ttl).timestamp()),
    }
    return jwt.encode(payload, settings.secret, algorithm=settings.algorithm)


# ==========================================================
# 🔍 Décodage / Validation
# ==========================================================

def decode_token(token: str, settings: JWTSettings) -> DecodedToken:
    """
    Décode et valide un token JWT (signature + expiration + émetteur).
    Lève JWTError en cas de signature invalide ou expirée.
    """
    decoded = jwt.decode(
        token,
        settings.secret,
        algorithms=[settings.algorithm],
        issuer=settings.issuer,
        options={"verify_aud": False},
    )
    return decoded  # type: ignore[return-value]


