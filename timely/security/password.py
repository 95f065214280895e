import hashlib
import hmac


def hash_password(password: str) -> bytes:
    """Empreinte SHA-256 du mot de passe (jamais conservé en clair en mémoire)."""
    return hashlib.sha256(password.encode("utf-8")).digest()


def verify_password(password: str, hashed: bytes) -> bool:
    # comparaison en temps constant
    return hmac.compare_digest(hash_password(password), hashed)
