import bcrypt


def hash_password(password: str) -> str:
    """Hash un mot de passe avec bcrypt (sel aléatoire inclus dans le hash)."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Vérifie un mot de passe contre son hash."""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # hash stocké illisible
        return False
