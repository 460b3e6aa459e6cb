import re
import logging
from typing import Any, Dict, List
from aiogram import Router, types, F
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.utils.keyboard import ReplyKeyboardBuilder, InlineKeyboardBuilder

from lojinic.core.database import get_session
from lojinic.core.states import StorefrontStates
from lojinic.services.store_service import StoreService
from lojinic.services.product_service import ProductService, match_product
from lojinic.services.cart_service import Cart
from lojinic.services.checkout_service import (
    CheckoutService,
    CheckoutError,
    PAYMENT_METHODS,
)
from lojinic.utils.cache import get_cached_catalog, cache_catalog
from lojinic.utils.formatting import format_price
from lojinic.utils.menu import get_main_keyboard, SHOPPER_MENU_TEXT

router = Router()
logger = logging.getLogger(__name__)

ADD_TO_CART_BUTTON = "🛍 Adicionar à sacola"
BACK_BUTTON = "⬅️ Voltar"
CHECKOUT_BUTTON = "✅ Finalizar pedido"
CONTINUE_BUTTON = "⬅️ Continuar comprando"

_LISTED_RE = re.compile(r"^(\d+)\.\s")
_CART_ACTION_RE = re.compile(r"^(➕|➖|🗑) (\d+)\.")

NO_STORE_TEXT = "Abra uma loja pelo link que o lojista compartilhou."


async def load_catalog(store_id: str) -> List[Dict[str, Any]]:
    """Каталог магазина из кэша, при промахе из БД с записью в кэш"""
    cached = await get_cached_catalog(store_id)
    if cached is not None:
        return cached

    async with get_session() as session:
        products = await ProductService(session).get_products(store_id)

    await cache_catalog(store_id, products)
    return [p.to_dict() for p in products]


def _catalog_keyboard(products: List[Dict[str, Any]]):
    kb = ReplyKeyboardBuilder()
    for i, p in enumerate(products, 1):
        kb.button(text=f"{i }. {p ['name']}")
    kb.adjust(2)
    kb.row(types.KeyboardButton(text="/cart"), types.KeyboardButton(text="/search"))
    return kb.as_markup(resize_keyboard=True)


def _catalog_text(store_name: str, products: List[Dict[str, Any]], title: str) -> str:
    if not products:
        return f"🏪 {store_name }\n\nNenhum produto encontrado."
    lines = [f"🏪 {store_name } - {title }", ""]
    for i, p in enumerate(products, 1):
        star = " ⭐" if p.get("featured") else ""
        lines.append(f"{i }. {p ['name']} - {format_price (p ['price'])}{star }")
    lines.append("")
    lines.append("Toque em um produto para ver os detalhes.")
    return "\n".join(lines)


def _cart_text(cart: Cart) -> str:
    if cart.is_empty():
        return "Sua sacola está vazia."
    lines = ["🛍 Sua sacola:", ""]
    for i, item in enumerate(cart.items, 1):
        lines.append(
            f"{i }. {item .quantity }x {item .name } - {format_price (item .subtotal )}"
        )
    lines.append("")
    lines.append(f"Total: {format_price (cart .total )} ({cart .count } itens)")
    return "\n".join(lines)


def _cart_keyboard(cart: Cart):
    kb = ReplyKeyboardBuilder()
    for i, item in enumerate(cart.items, 1):
        kb.row(
            types.KeyboardButton(text=f"➕ {i }. {item .name }"),
            types.KeyboardButton(text=f"➖ {i }. {item .name }"),
            types.KeyboardButton(text=f"🗑 {i }. {item .name }"),
        )
    if not cart.is_empty():
        kb.row(types.KeyboardButton(text=CHECKOUT_BUTTON))
    kb.row(types.KeyboardButton(text=CONTINUE_BUTTON))
    return kb.as_markup(resize_keyboard=True)


async def _get_cart(state: FSMContext) -> Cart:
    data = await state.get_data()
    return Cart.from_state(data.get("cart"))


async def _save_cart(state: FSMContext, cart: Cart):
    await state.update_data(cart=cart.to_state())


async def show_catalog(
    message: types.Message,
    state: FSMContext,
    query: str = "",
    featured_only: bool = False,
):
    data = await state.get_data()
    store_id = data.get("store_id")
    if not store_id:
        await message.answer(NO_STORE_TEXT)
        return

    catalog = await load_catalog(store_id)
    products = [
        p
        for p in catalog
        if match_product(p["name"], p.get("featured"), query, featured_only)
    ]

    if featured_only:
        title = "Destaques"
    elif query:
        title = f'Busca: "{query }"'
    else:
        title = "Todos"

    await state.update_data(listed=products)
    await message.answer(
        _catalog_text(data.get("store_name", ""), products, title),
        reply_markup=_catalog_keyboard(products),
    )
    await state.set_state(StorefrontStates.browsing)


async def open_storefront(message: types.Message, state: FSMContext, store_id: str):
    """
    Открывает витрину магазина в чате покупателя. Корзина начинается пустой.
    """
    async with get_session() as session:
        store = await StoreService(session).get_store_by_id(store_id)

    if not store:
        await state.clear()
        await message.answer("Loja não encontrada.")
        return

    await state.clear()
    await state.update_data(
        store_id=store.id, store_name=store.name, cart=[], listed=[]
    )
    logger.info("Открыта витрина %s в чате %s", store.id, message.chat.id)

    await message.answer(f"Bem-vindo à {store .name }!")
    await message.answer(SHOPPER_MENU_TEXT, parse_mode="HTML")
    await show_catalog(message, state)


@router.message(Command("catalog"))
async def cmd_catalog(message: types.Message, state: FSMContext):
    await show_catalog(message, state)


@router.message(Command("featured"))
async def cmd_featured(message: types.Message, state: FSMContext):
    await show_catalog(message, state, featured_only=True)


@router.message(Command("search"))
async def cmd_search(message: types.Message, state: FSMContext):
    data = await state.get_data()
    if not data.get("store_id"):
        await message.answer(NO_STORE_TEXT)
        return

    await message.answer(
        "O que você procura?", reply_markup=types.ReplyKeyboardRemove()
    )
    await state.set_state(StorefrontStates.waiting_search)


@router.message(StorefrontStates.waiting_search, F.text)
async def process_search(message: types.Message, state: FSMContext):
    await show_catalog(message, state, query=message.text.strip())


@router.message(Command("cart"))
async def cmd_cart(message: types.Message, state: FSMContext):
    data = await state.get_data()
    if not data.get("store_id"):
        await message.answer(NO_STORE_TEXT)
        return

    cart = await _get_cart(state)
    await message.answer(_cart_text(cart), reply_markup=_cart_keyboard(cart))
    await state.set_state(StorefrontStates.viewing_cart)


@router.message(Command("checkout"))
async def cmd_checkout(message: types.Message, state: FSMContext):
    data = await state.get_data()
    if not data.get("store_id"):
        await message.answer(NO_STORE_TEXT)
        return

    cart = await _get_cart(state)
    if cart.is_empty():
        await message.answer("Sua sacola está vazia.")
        return

    await message.answer(
        "Nenhum pagamento é feito agora. Você paga diretamente ao lojista na "
        "entrega/retirada.\n\nQual é o seu nome?",
        reply_markup=types.ReplyKeyboardRemove(),
    )
    await state.set_state(StorefrontStates.waiting_customer_name)


@router.message(StorefrontStates.browsing, F.text, ~F.text.startswith("/"))
async def process_product_selection(message: types.Message, state: FSMContext):
    data = await state.get_data()
    listed = data.get("listed") or []
    text = message.text.strip()

    product = None
    match = _LISTED_RE.match(text)
    if match and 1 <= int(match.group(1)) <= len(listed):
        product = listed[int(match.group(1)) - 1]
    else:
        product = next(
            (p for p in listed if p["name"].lower() == text.lower()), None
        )

    if not product:
        await message.answer("Produto não encontrado. Escolha um item da lista.")
        return

    description = product.get("description") or "Sem descrição disponível para este produto."
    badge = "⭐ DESTAQUE\n" if product.get("featured") else ""
    image_url = product.get("image_url") or ""
    kb = ReplyKeyboardBuilder()
    kb.button(text=ADD_TO_CART_BUTTON)
    kb.button(text=BACK_BUTTON)
    kb.adjust(1)

    await state.update_data(selected_product=product)
    await message.answer(
        f"{badge }{product ['name']}\n{format_price (product ['price'])}\n\n"
        f"{description }\n\n{image_url }",
        reply_markup=kb.as_markup(resize_keyboard=True),
    )
    await state.set_state(StorefrontStates.viewing_product)


@router.message(StorefrontStates.viewing_product, F.text == ADD_TO_CART_BUTTON)
async def process_add_to_cart(message: types.Message, state: FSMContext):
    data = await state.get_data()
    product = data.get("selected_product")
    if not product:
        await show_catalog(message, state)
        return

    cart = await _get_cart(state)
    cart.add(product)
    await _save_cart(state, cart)
    await state.update_data(selected_product=None)

    await message.answer(f"✅ {product ['name']} adicionado à sacola")
    await show_catalog(message, state)


@router.message(StorefrontStates.viewing_product)
async def process_product_back(message: types.Message, state: FSMContext):
    await state.update_data(selected_product=None)
    await show_catalog(message, state)


@router.message(StorefrontStates.viewing_cart, F.text == CHECKOUT_BUTTON)
async def process_cart_checkout(message: types.Message, state: FSMContext):
    await cmd_checkout(message, state)


@router.message(StorefrontStates.viewing_cart, F.text == CONTINUE_BUTTON)
async def process_cart_continue(message: types.Message, state: FSMContext):
    await show_catalog(message, state)


@router.message(StorefrontStates.viewing_cart, F.text)
async def process_cart_action(message: types.Message, state: FSMContext):
    cart = await _get_cart(state)
    match = _CART_ACTION_RE.match(message.text.strip())
    if not match or not 1 <= int(match.group(2)) <= len(cart.items):
        await message.answer(
            "Use os botões para alterar a sacola.", reply_markup=_cart_keyboard(cart)
        )
        return

    action, item = match.group(1), cart.items[int(match.group(2)) - 1]
    if action == "➕":
        cart.change_quantity(item.id, 1)
    elif action == "➖":
        cart.change_quantity(item.id, -1)
    else:
        cart.remove(item.id)

    await _save_cart(state, cart)
    await message.answer(_cart_text(cart), reply_markup=_cart_keyboard(cart))


@router.message(StorefrontStates.waiting_customer_name, F.text)
async def process_customer_name(message: types.Message, state: FSMContext):
    name = message.text.strip()
    if not name:
        await message.answer("Por favor, informe seu nome para continuar.")
        return

    await state.update_data(customer_name=name)
    kb = ReplyKeyboardBuilder()
    for method in PAYMENT_METHODS:
        kb.button(text=method)
    kb.adjust(1)
    await message.answer(
        "Forma de pagamento:", reply_markup=kb.as_markup(resize_keyboard=True)
    )
    await state.set_state(StorefrontStates.waiting_payment_method)


@router.message(StorefrontStates.waiting_payment_method, F.text.in_(PAYMENT_METHODS))
async def process_payment_method(message: types.Message, state: FSMContext):
    data = await state.get_data()
    cart = await _get_cart(state)

    async with get_session() as session:
        store = await StoreService(session).get_store_by_id(data.get("store_id"))

    if not store:
        await state.clear()
        await message.answer("Loja não encontrada.")
        return

    try:
        link = CheckoutService().checkout(
            store, data.get("customer_name", ""), cart, message.text
        )
    except CheckoutError as e:
        await message.answer(f"❌ {e }", reply_markup=get_main_keyboard("shopper"))
        await state.set_state(StorefrontStates.browsing)
        return

    await _save_cart(state, cart)
    await state.update_data(customer_name=None)

    kb = InlineKeyboardBuilder()
    kb.button(text="Enviar pedido no WhatsApp", url=link)
    await message.answer(
        "Pedido pronto! Toque no botão para enviar ao lojista pelo WhatsApp.",
        reply_markup=kb.as_markup(),
    )
    await message.answer(
        "Obrigado pela compra!", reply_markup=get_main_keyboard("shopper")
    )
    await state.set_state(StorefrontStates.browsing)


@router.message(StorefrontStates.waiting_payment_method)
async def process_payment_method_invalid(message: types.Message, state: FSMContext):
    await message.answer("Escolha uma forma de pagamento no teclado.")
