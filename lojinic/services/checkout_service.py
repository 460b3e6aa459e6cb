import logging
from typing import List
from urllib.parse import quote
from lojinic.models.store import Store
from lojinic.services.cart_service import Cart
from lojinic.utils.formatting import format_price

logger = logging.getLogger(__name__)

PAYMENT_METHODS: List[str] = ["Pix na Entrega", "Dinheiro", "Cartão de Crédito/Débito"]
DEFAULT_PAYMENT_METHOD = PAYMENT_METHODS[0]


class CheckoutError(ValueError):
    """Заказ нельзя отправить: нет WhatsApp у магазина, имени клиента или товаров"""


class CheckoutService:
    @staticmethod
    def build_order_message(
        store: Store, customer_name: str, cart: Cart, payment_method: str
    ) -> str:
        """
        Формирует текст заказа для WhatsApp.

        Args:
            store: Магазин, в котором оформляется заказ
            customer_name: Имя покупателя
            cart: Корзина
            payment_method: Способ оплаты

        Returns:
            str: Текст заказа с позициями и итоговой суммой
        """
        items_list = "\n".join(
            f"• {item .quantity }x {item .name } - {format_price (item .subtotal )}"
            for item in cart.items
        )
        return (
            f"*PEDIDO ONLINE - {store .name }*\n\n"
            f"👤 *Cliente:* {customer_name }\n"
            f"📦 *Itens:*\n{items_list }\n\n"
            f"💰 *TOTAL: {format_price (cart .total )}*\n"
            f"💳 *Pagamento:* {payment_method }\n\n"
            f"_Enviado via LojinIC_"
        )

    @staticmethod
    def build_whatsapp_link(whatsapp: str, message: str) -> str:
        return f"https://wa.me/{whatsapp }?text={quote (message ,safe ='')}"

    def checkout(
        self,
        store: Store,
        customer_name: str,
        cart: Cart,
        payment_method: str = DEFAULT_PAYMENT_METHOD,
    ) -> str:
        """
        Собирает ссылку на WhatsApp и очищает корзину. Доставка сообщения
        не подтверждается, поэтому корзина очищается в любом случае.

        Raises:
            CheckoutError: Если заказ нельзя отправить
        """
        if not store.whatsapp:
            raise CheckoutError("Loja indisponível (Sem WhatsApp configurado).")
        if not customer_name or not customer_name.strip():
            raise CheckoutError("Por favor, informe seu nome para continuar.")
        if cart.is_empty():
            raise CheckoutError("Sua sacola está vazia.")

        message = self.build_order_message(
            store, customer_name.strip(), cart, payment_method
        )
        link = self.build_whatsapp_link(store.whatsapp, message)
        logger.info(
            "Заказ для магазина %s: %s позиций на сумму %.2f",
            store.id,
            len(cart.items),
            cart.total,
        )
        cart.clear()
        return link
