from passlib.context import CryptContext
from passlib.exc import UnknownHashError

from user_api.core.exceptions import HashingFailed

# PUBLIC_INTERFACE
pwd_context = CryptContext(schemes=["argon2"])

# PUBLIC_INTERFACE
def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash.

    Args:
        plain_password: The plaintext password to verify
        hashed_password: The hashed password to verify against

    Returns:
        bool: True if the password matches, False otherwise
    """
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (UnknownHashError, ValueError, TypeError):
        return False

# PUBLIC_INTERFACE
def get_password_hash(password: str) -> str:
    """
    Generate a salted password hash using Argon2 with the library default cost.

    Args:
        password: The plaintext password to hash

    Returns:
        str: The hashed password

    Raises:
        HashingFailed: If the password cannot be hashed
    """
    try:
        return pwd_context.hash(password)
    except (ValueError, TypeError, RuntimeError) as e:
        raise HashingFailed(e) from e
