# repository/namespaces.py
from typing import Final

USERNAMES: Final[str] = "usernames"

USERNAME_SET: Final[str] = f"{USERNAMES}:set"  # every permanently claimed handle
USERNAME_LOCK_PREFIX: Final[str] = "username:lock:"  # + normalized candidate
