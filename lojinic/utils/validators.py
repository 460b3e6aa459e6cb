import re


def validate_price(price_str: str) -> float:
    """
    Валидирует строку цены товара и преобразует её в число.

    Args:
        price_str: Строка с ценой ("12,50", "12.5", "R$ 10")

    Returns:
        float: Цена

    Raises:
        ValueError: Если строка имеет неправильный формат или цена отрицательная
    """
    if not price_str or not price_str.strip():
        raise ValueError("O preço não pode ficar vazio")

    price_str = price_str.strip().replace("R$", "").strip().replace(",", ".")

    if price_str.startswith("-"):
        raise ValueError("O preço não pode ser negativo")

    if not re.match(r"^[0-9]+(\.[0-9]+)?$", price_str):
        raise ValueError(
            f"Formato de preço inválido: {price_str }. Use apenas números e ponto/vírgula."
        )

    return float(price_str)


def is_valid_store_name(name: str) -> bool:
    """
    Проверяет, является ли название магазина допустимым.

    Args:
        name: Название магазина для проверки

    Returns:
        bool: True если название непустое и не длиннее 100 символов
    """
    if not name or not name.strip():
        return False

    return len(name) <= 100


def is_valid_email(email: str) -> bool:
    pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"
    return bool(re.match(pattern, (email or "").strip()))


def normalize_whatsapp(phone: str) -> str:
    """
    Приводит номер WhatsApp к виду, который принимает wa.me: только цифры
    с кодом страны.

    Raises:
        ValueError: Если номер не похож на телефон
    """
    clean_phone = re.sub(r"\D", "", phone or "")

    # 10-11 цифр без кода страны считаем бразильским номером
    if len(clean_phone) in (10, 11):
        clean_phone = "55" + clean_phone

    if not re.match(r"^[0-9]{12,15}$", clean_phone):
        raise ValueError(f"Número de WhatsApp inválido: {phone }")

    return clean_phone


def is_valid_color(color: str) -> bool:
    """Цвет бренда в формате #RRGGBB или #RGB"""
    return bool(re.match(r"^#(?:[0-9a-fA-F]{3}){1,2}$", (color or "").strip()))


def parse_yes_no(text: str) -> bool:
    """Ответ "sim"/"não" с клавиатуры"""
    return (text or "").strip().lower() in ("sim", "s", "yes", "y")


def sanitize_input(input_str: str) -> str:
    """
    Санитизирует ввод пользователя для предотвращения инъекций.

    Args:
        input_str: Ввод пользователя

    Returns:
        str: Санитизированная строка
    """
    if not input_str:
        return ""

    sanitized = re.sub(r'[<>\'";]', "", input_str)

    return sanitized[:1000]
