from lojinic.core.config import BOT_USERNAME

STATUS_LABELS = {
    "active": "ATIVA",
    "pending": "PENDENTE",
    "blocked": "BLOQUEADA",
}

PLAN_LABELS = {
    "mensal": "Mensal",
    "anual": "Anual",
}


def format_price(value: float) -> str:
    """Цена в формате витрины: "R$ 12.50" (два знака после точки)"""
    return f"R$ {float (value ):.2f}"


def format_status(status: str) -> str:
    return STATUS_LABELS.get(status, status.upper())


def storefront_link(store_id: str) -> str:
    """Публичная ссылка на витрину через deep-link бота"""
    return f"https://t.me/{BOT_USERNAME }?start=store_{store_id }"
