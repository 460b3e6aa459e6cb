import pytest
from urllib.parse import unquote
from lojinic.models.product import Product
from lojinic.models.store import Store
from lojinic.services.cart_service import Cart
from lojinic.services.checkout_service import (
    CheckoutService,
    CheckoutError,
    DEFAULT_PAYMENT_METHOD,
    PAYMENT_METHODS,
)


def make_store(whatsapp="5511999998888"):
    return Store(
        id="store_1",
        owner_id="user_a",
        name="Doces da Maria",
        whatsapp=whatsapp,
        color="#2563eb",
        status="active",
        plan="mensal",
    )


def make_cart():
    cart = Cart()
    brig = Product(id="p_1", store_id="store_1", name="Brigadeiro", price=3.5)
    bolo = Product(id="p_2", store_id="store_1", name="Bolo", price=20.0)
    cart.add(brig)
    cart.add(brig)
    cart.add(bolo)
    return cart


def test_order_message_format():
    message = CheckoutService.build_order_message(
        make_store(), "João", make_cart(), "Dinheiro"
    )

    assert message == (
        "*PEDIDO ONLINE - Doces da Maria*\n\n"
        "👤 *Cliente:* João\n"
        "📦 *Itens:*\n"
        "• 2x Brigadeiro - R$ 7.00\n"
        "• 1x Bolo - R$ 20.00\n\n"
        "💰 *TOTAL: R$ 27.00*\n"
        "💳 *Pagamento:* Dinheiro\n\n"
        "_Enviado via LojinIC_"
    )


def test_total_is_sum_of_price_times_quantity():
    cart = Cart()
    cart.add(Product(id="p_1", store_id="s", name="A", price=0.1))
    cart.change_quantity("p_1", 2)
    cart.add(Product(id="p_2", store_id="s", name="B", price=1.005))

    message = CheckoutService.build_order_message(make_store(), "Ana", cart, "Pix")
    expected = f"{0.1 * 3 + 1.005 :.2f}"
    assert f"*TOTAL: R$ {expected }*" in message


def test_whatsapp_link():
    link = CheckoutService.build_whatsapp_link("5511999998888", "Olá mundo & cia")
    assert link.startswith("https://wa.me/5511999998888?text=")
    assert " " not in link
    assert unquote(link.split("?text=")[1]) == "Olá mundo & cia"


def test_checkout_returns_link_and_clears_cart():
    cart = make_cart()
    link = CheckoutService().checkout(make_store(), "  João ", cart, "Dinheiro")

    assert link.startswith("https://wa.me/5511999998888?text=")
    text = unquote(link.split("?text=")[1])
    assert "👤 *Cliente:* João\n" in text
    assert "R$ 27.00" in text
    assert cart.is_empty()


def test_checkout_without_whatsapp():
    cart = make_cart()
    with pytest.raises(CheckoutError):
        CheckoutService().checkout(make_store(whatsapp=""), "João", cart)
    assert not cart.is_empty()


def test_checkout_without_customer_name():
    cart = make_cart()
    with pytest.raises(CheckoutError):
        CheckoutService().checkout(make_store(), "  ", cart)
    assert not cart.is_empty()


def test_checkout_with_empty_cart():
    with pytest.raises(CheckoutError):
        CheckoutService().checkout(make_store(), "João", Cart())


def test_default_payment_method():
    assert DEFAULT_PAYMENT_METHOD == "Pix na Entrega"
    assert DEFAULT_PAYMENT_METHOD in PAYMENT_METHODS
    assert issubclass(CheckoutError, ValueError)
