import random
import string
from lojinic.models.store import now_ms

_BASE36 = string.digits + string.ascii_lowercase


def _random_suffix(length: int) -> str:
    return "".join(random.choices(_BASE36, k=length))


def generate_store_id() -> str:
    """Идентификатор магазина: store_<мс>_<6 символов base36>"""
    return f"store_{now_ms ()}_{_random_suffix (6 )}"


def generate_product_id() -> str:
    """Идентификатор товара: p_<мс>_<9 символов base36>"""
    return f"p_{now_ms ()}_{_random_suffix (9 )}"
