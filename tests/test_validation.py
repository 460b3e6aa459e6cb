import pytest
from lojinic.utils.validators import (
    validate_price,
    is_valid_store_name,
    is_valid_email,
    normalize_whatsapp,
    is_valid_color,
    parse_yes_no,
    sanitize_input,
)


def test_price_validation():
    """Тест валидации цены товара"""

    assert validate_price("10") == 10.0
    assert validate_price("12.50") == 12.5
    assert validate_price("12,50") == 12.5
    assert validate_price("R$ 7,90") == 7.9
    assert validate_price("0") == 0.0

    with pytest.raises(ValueError):
        validate_price("-1")
    with pytest.raises(ValueError):
        validate_price("")
    with pytest.raises(ValueError):
        validate_price("dez reais")
    with pytest.raises(ValueError):
        validate_price("1.2.3")


def test_store_name_validation():
    """Тест валидации названия магазина"""

    assert is_valid_store_name("Doces da Maria")
    assert is_valid_store_name("Loja 123")

    assert not is_valid_store_name("")
    assert not is_valid_store_name("   ")
    assert not is_valid_store_name("A" * 101)
    assert is_valid_store_name("Select Modas")
    assert is_valid_store_name("Update Games")
    assert is_valid_store_name("Pão; Café")
    assert is_valid_store_name("Doces -- Salgados")
    assert is_valid_store_name("Doces & Cia <3")


def test_email_validation():
    assert is_valid_email("maria@gmail.com")
    assert is_valid_email("  admin@lojinic.com ")
    assert not is_valid_email("maria")
    assert not is_valid_email("maria@")
    assert not is_valid_email("")


def test_whatsapp_normalization():
    """Тест нормализации номера WhatsApp"""

    assert normalize_whatsapp("5511999998888") == "5511999998888"
    assert normalize_whatsapp("+55 (11) 99999-8888") == "5511999998888"
    assert normalize_whatsapp("(11) 99999-8888") == "5511999998888"
    assert normalize_whatsapp("11 3333-4444") == "551133334444"

    with pytest.raises(ValueError):
        normalize_whatsapp("12345")
    with pytest.raises(ValueError):
        normalize_whatsapp("")


def test_color_validation():
    assert is_valid_color("#2563eb")
    assert is_valid_color("#FFF")
    assert not is_valid_color("2563eb")
    assert not is_valid_color("#12345")
    assert not is_valid_color("azul")


def test_yes_no():
    assert parse_yes_no("Sim")
    assert parse_yes_no(" s ")
    assert not parse_yes_no("Não")
    assert not parse_yes_no("")


def test_sanitize_input():
    assert sanitize_input("<b>Bolo</b>") == "bBolo/b"
    assert sanitize_input("") == ""
    assert len(sanitize_input("x" * 2000)) == 1000
