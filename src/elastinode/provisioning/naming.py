import secrets
import string

HOSTNAME_ALPHABET = string.ascii_lowercase + string.digits
HOSTNAME_SUFFIX_LENGTH = 8


def generate_hostname(images_count: int, prefix: str = "nodeodm") -> str:
    """Resource name from a workload-size hint and a random suffix."""
    random_suffix = "".join(
        secrets.choice(HOSTNAME_ALPHABET) for _ in range(HOSTNAME_SUFFIX_LENGTH)
    )
    return f"{prefix}-{images_count}-{random_suffix}".lower()


def generate_node_token() -> str:
    """Short, unguessable credential the worker uses to authenticate back."""
    return secrets.token_urlsafe(16)
