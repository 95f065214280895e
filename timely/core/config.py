"""
➡️ But : Centraliser tous les paramètres configurables (nom d’app, chemin DB, mot de passe, cookie de session, etc.)

Utilise pydantic-settings pour charger automatiquement les variables d’environnement (.env, variables système…).

Fournit un objet settings unique, que tu importes ailleurs :

from timely.core.config import settings
print(settings.APP_NAME)


🔹 Avantages :

Plus propre que des constantes éparpillées dans le code.

Facilite le passage entre environnements (dev / prod / test).
"""

from datetime import timedelta
from typing import Optional

from pydantic_settings import BaseSettings
from timely.security.tokens import JWTSettings


class Settings(BaseSettings):
    # -----------------------------
    # App
    # -----------------------------
    APP_NAME: str = "Timely"
    ENV: str = "dev"  # dev | prod | test
    LOG_LEVEL: str = "INFO"

    HOST: str = "127.0.0.1"
    PORT: int = 8080

    # Sert l'application sous /timely (derrière un reverse proxy partagé)
    RUN_ON_SUBPATH: bool = False
    SUBPATH: str = "/timely"

    # -----------------------------
    # DB
    # -----------------------------
    SQLITE_PATH: str = "timely.db"  # fichier SQLite
    # Si tu veux forcer une URL différente (ex: Postgres), définis DATABASE_URL dans l'env.
    DATABASE_URL: Optional[str] = None

    # -----------------------------
    # Auth (mot de passe unique + session JWT)
    # -----------------------------
    PASSWORD: str = "CHANGE_ME"            # ⚠️ change en prod
    SESSION_SECRET_KEY: str = "CHANGE_ME"  # ⚠️ change en prod
    SESSION_ISSUER: str = "timely"
    SESSION_ALGORITHM: str = "HS256"
    SESSION_TTL_HOURS: int = 24 * 30

    # Cookie de session
    AUTH_COOKIE_NAME: str = "auth"
    AUTH_COOKIE_SAMESITE: str = "lax"     # "lax" | "strict" | "none"
    AUTH_COOKIE_SECURE: Optional[bool] = None   # auto selon ENV si None

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }

    # -----------------------------
    # Post-process values
    # -----------------------------
    def model_post_init(self, __context): # appelée automatiquement
        # DATABASE_URL par défaut depuis SQLITE_PATH si non fourni
        if not self.DATABASE_URL:
            object.__setattr__(self, "DATABASE_URL", f"sqlite:///{self.SQLITE_PATH}")

        # Cookie secure auto: true en prod si non spécifié
        if self.AUTH_COOKIE_SECURE is None:
            object.__setattr__(self, "AUTH_COOKIE_SECURE", self.ENV == "prod")

    @property
    def ROOT_URL(self) -> str:
        """Préfixe des URLs générées (redirections, templates, appels JS)."""
        if self.RUN_ON_SUBPATH:
            return "/" + self.SUBPATH.strip("/")
        return ""


# Instance globale importable partout
settings = Settings()

# Objet JWT prêt à l'emploi pour le service d'authentification
jwt_settings = JWTSettings(
    secret=settings.SESSION_SECRET_KEY,
    issuer=settings.SESSION_ISSUER,
    algorithm=settings.SESSION_ALGORITHM,
    session_ttl=timedelta(hours=settings.SESSION_TTL_HOURS),
)
