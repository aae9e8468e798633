from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

# argon2id with a fresh random salt per hash; the salt is stored inside the hash string
pwd_context = PasswordHasher()


def hash_password(plain_password: str) -> str:
    return pwd_context.hash(plain_password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Recompute the hash with the stored salt and compare in constant time.
    A stored value that is not an argon2 hash never verifies.
    """
    try:
        return pwd_context.verify(hashed_password, plain_password)
    except (VerificationError, InvalidHashError):
        return False
