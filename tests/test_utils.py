import re
from unittest.mock import patch
from lojinic.core.config import BOT_USERNAME
from lojinic.models.user import User
from lojinic.utils.ids import generate_store_id, generate_product_id
from lojinic.utils.formatting import format_price, format_status, storefront_link
from lojinic.utils.permissions import is_admin, is_merchant
from lojinic.utils.menu import get_main_keyboard, get_menu_text


def test_id_formats():
    assert re.match(r"^store_\d+_[0-9a-z]{6}$", generate_store_id())
    assert re.match(r"^p_\d+_[0-9a-z]{9}$", generate_product_id())
    assert len({generate_product_id() for _ in range(50)}) == 50


def test_formatting():
    assert format_price(7) == "R$ 7.00"
    assert format_price(27.005) in ("R$ 27.00", "R$ 27.01")
    assert format_status("active") == "ATIVA"
    assert format_status("pending") == "PENDENTE"
    assert format_status("blocked") == "BLOQUEADA"
    assert (
        storefront_link("store_1_abc")
        == f"https://t.me/{BOT_USERNAME }?start=store_store_1_abc"
    )


def test_permissions():
    admin = User(uid="admin_uid", email="admin@lojinic.com", is_admin=True)
    merchant = User(uid="user_maria", email="maria@gmail.com", is_admin=False)

    assert is_admin(admin)
    assert not is_admin(merchant)
    assert not is_admin(None)

    assert is_merchant(merchant)
    assert not is_merchant(admin)
    assert not is_merchant(None)

    assert admin.role == "admin"
    assert merchant.role == "merchant"


def test_menu_per_role():
    assert "/togglestore" in get_menu_text("admin")
    assert "/addproduct" in get_menu_text("merchant")
    assert "/catalog" in get_menu_text("shopper")
    assert "/register" in get_menu_text(None)

    keyboard = get_main_keyboard("merchant")
    buttons = [b.text for row in keyboard.keyboard for b in row]
    assert "/subscription" in buttons
    assert "/stores" not in buttons


def test_ids_share_store_clock():
    with patch("lojinic.utils.ids.now_ms", return_value=42):
        assert generate_store_id().startswith("store_42_")
        assert generate_product_id().startswith("p_42_")
