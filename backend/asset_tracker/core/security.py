from functools import lru_cache
import secrets

from passlib.context import CryptContext

from .settings import settings

# Password hashing
pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
    argon2__time_cost=settings.ARGON2_TIME_COST,
    argon2__memory_cost=settings.ARGON2_MEMORY_COST,
    argon2__parallelism=settings.ARGON2_PARALLELISM,
)

def hash_password(password: str) -> str:
    return pwd_context.hash(password + settings.PASSWORD_PEPPER)

def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password + settings.PASSWORD_PEPPER, hashed_password)

@lru_cache(maxsize=1)
def dummy_hash() -> str:
    """Hash verified against when no account matches, so misses cost the same."""
    return hash_password(secrets.token_urlsafe(16))
