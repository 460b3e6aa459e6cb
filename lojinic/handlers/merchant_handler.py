import re
import logging
from typing import List, Optional
from aiogram import Router, types
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.utils.keyboard import ReplyKeyboardBuilder
from aiogram.utils.markdown import hbold

from lojinic.core.database import get_session
from lojinic.core.states import (
    AddProductStates,
    EditProductStates,
    DeleteProductStates,
    StoreSettingsStates,
    PaymentStates,
)
from lojinic.models.product import Product
from lojinic.models.store import Store
from lojinic.models.user import User
from lojinic.services.store_service import StoreService, StorePatch, PLAN_PRICES
from lojinic.services.product_service import ProductService, ProductData, ProductPatch
from lojinic.services.config_service import ConfigService
from lojinic.utils.cache import invalidate_catalog
from lojinic.utils.formatting import (
    format_price,
    format_status,
    storefront_link,
    PLAN_LABELS,
)
from lojinic.utils.menu import get_main_keyboard
from lojinic.utils.permissions import is_merchant
from lojinic.utils.validators import (
    validate_price,
    parse_yes_no,
    is_valid_store_name,
    is_valid_color,
    normalize_whatsapp,
    sanitize_input,
)

router = Router()
logger = logging.getLogger(__name__)

LOCKED_TEXT = (
    "🔒 Sua loja ainda não está ativa. Conclua a assinatura em /subscription "
    "para liberar produtos e configurações."
)
SKIP_MARK = "-"

PRODUCT_FIELDS = {
    "Nome": "name",
    "Preço": "price",
    "Imagem": "image_url",
    "Destaque": "featured",
    "Descrição": "description",
}

SETTINGS_FIELDS = {
    "Nome da loja": "name",
    "WhatsApp": "whatsapp",
    "Cor": "color",
}

_INDEX_RE = re.compile(r"^(\d+)\.")


def _yes_no_keyboard():
    kb = ReplyKeyboardBuilder()
    kb.button(text="Sim")
    kb.button(text="Não")
    kb.adjust(2)
    return kb.as_markup(resize_keyboard=True)


def _choice_keyboard(labels):
    kb = ReplyKeyboardBuilder()
    for label in labels:
        kb.button(text=label)
    kb.adjust(2)
    return kb.as_markup(resize_keyboard=True)


def _products_keyboard(products: List[Product]):
    kb = ReplyKeyboardBuilder()
    for i, p in enumerate(products, 1):
        kb.button(text=f"{i }. {p .name }")
    kb.adjust(1)
    return kb.as_markup(resize_keyboard=True)


def _pick_product_id(text: str, product_ids: List[str]) -> Optional[str]:
    match = _INDEX_RE.match((text or "").strip())
    if not match:
        return None
    index = int(match.group(1))
    if 1 <= index <= len(product_ids):
        return product_ids[index - 1]
    return None


async def _load_merchant_store(
    message: types.Message,
    session,
    current_user: Optional[User],
    require_active: bool = True,
) -> Optional[Store]:
    """
    Магазин текущего продавца с проверкой доступа.

    Args:
        message: Входящее сообщение, на него отправляется отказ
        session: Сессия БД
        current_user: Пользователь из сессии чата
        require_active: Требовать статус active (каталог и настройки)

    Returns:
        Optional[Store]: Магазин или None, если пользователю уже ответили отказом
    """
    if not is_merchant(current_user):
        await message.answer("Entre como lojista para usar este comando: /login")
        return None

    store = await StoreService(session).get_my_store(current_user.uid)
    if not store:
        await message.answer("Você ainda não tem uma loja. Use /register para criar.")
        return None

    if require_active and not store.is_active:
        await message.answer(LOCKED_TEXT)
        return None

    return store


@router.message(Command("mystore"))
async def cmd_my_store(
    message: types.Message, state: FSMContext, current_user: Optional[User] = None
):
    """Сводка по магазину продавца"""
    await state.clear()

    async with get_session() as session:
        store = await _load_merchant_store(
            message, session, current_user, require_active=False
        )
        if not store:
            return
        stats = await ProductService(session).get_catalog_stats(store.id)

    lines = [
        f"🏪 {hbold (store .name )}",
        f"Status: {format_status (store .status )}",
        f"Plano: {PLAN_LABELS .get (store .plan ,store .plan )}",
        f"WhatsApp: {store .whatsapp or 'não configurado'}",
        f"Cor: {store .color }",
    ]
    if store.is_active:
        lines += [
            "",
            f"Total de produtos: {stats ['total']}",
            f"Destaques: {stats ['featured']}",
            f"Valor do catálogo: {format_price (stats ['total_value'])}",
            "",
            f"Loja online: {storefront_link (store .id )}",
        ]
    else:
        lines += ["", LOCKED_TEXT]

    await message.answer(
        "\n".join(lines), parse_mode="HTML", reply_markup=get_main_keyboard("merchant")
    )


@router.message(Command("products"))
async def cmd_products(
    message: types.Message, state: FSMContext, current_user: Optional[User] = None
):
    await state.clear()

    async with get_session() as session:
        store = await _load_merchant_store(message, session, current_user)
        if not store:
            return
        products = await ProductService(session).get_products(store.id)

    if not products:
        await message.answer(
            "Seu catálogo está vazio. Adicione um produto com /addproduct."
        )
        return

    lines = ["📦 Seus produtos:", ""]
    for i, p in enumerate(products, 1):
        star = " ⭐" if p.featured else ""
        lines.append(f"{i }. {p .name } - {format_price (p .price )}{star }")

    await message.answer("\n".join(lines), reply_markup=get_main_keyboard("merchant"))


@router.message(Command("addproduct"))
async def cmd_add_product(
    message: types.Message, state: FSMContext, current_user: Optional[User] = None
):
    await state.clear()

    async with get_session() as session:
        store = await _load_merchant_store(message, session, current_user)
        if not store:
            return

    await state.update_data(store_id=store.id)
    await message.answer(
        "Nome do produto:", reply_markup=types.ReplyKeyboardRemove()
    )
    await state.set_state(AddProductStates.waiting_name)


@router.message(AddProductStates.waiting_name)
async def process_product_name(message: types.Message, state: FSMContext):
    await state.update_data(name=sanitize_input((message.text or "").strip()))
    await message.answer("Preço (ex.: 29,90):")
    await state.set_state(AddProductStates.waiting_price)


@router.message(AddProductStates.waiting_price)
async def process_product_price(message: types.Message, state: FSMContext):
    try:
        price = validate_price(message.text or "")
    except ValueError as e:
        await message.answer(f"❌ {e }\nInforme o preço novamente:")
        return

    await state.update_data(price=price)
    await message.answer(
        f"URL da imagem (ou {SKIP_MARK } para usar uma imagem padrão):"
    )
    await state.set_state(AddProductStates.waiting_image)


@router.message(AddProductStates.waiting_image)
async def process_product_image(message: types.Message, state: FSMContext):
    text = (message.text or "").strip()
    await state.update_data(image_url="" if text == SKIP_MARK else text)
    await message.answer("Produto em destaque?", reply_markup=_yes_no_keyboard())
    await state.set_state(AddProductStates.waiting_featured)


@router.message(AddProductStates.waiting_featured)
async def process_product_featured(message: types.Message, state: FSMContext):
    await state.update_data(featured=parse_yes_no(message.text))
    await message.answer(
        f"Descrição (ou {SKIP_MARK } para deixar em branco):",
        reply_markup=types.ReplyKeyboardRemove(),
    )
    await state.set_state(AddProductStates.waiting_description)


@router.message(AddProductStates.waiting_description)
async def process_product_description(message: types.Message, state: FSMContext):
    text = (message.text or "").strip()
    data = await state.get_data()

    product_data = ProductData(
        store_id=data["store_id"],
        name=data.get("name", ""),
        price=data.get("price", 0.0),
        image_url=data.get("image_url", ""),
        featured=data.get("featured", False),
        description="" if text == SKIP_MARK else sanitize_input(text),
    )

    try:
        async with get_session() as session:
            product = await ProductService(session).add_product(product_data)
    except ValueError as e:
        await message.answer(
            f"❌ Erro ao salvar produto: {e }", reply_markup=get_main_keyboard("merchant")
        )
        await state.clear()
        return

    await invalidate_catalog(product.store_id)
    await state.clear()
    await message.answer(
        f"✅ Produto adicionado ao catálogo: {product .name } ({format_price (product .price )})",
        reply_markup=get_main_keyboard("merchant"),
    )


@router.message(Command("editproduct"))
async def cmd_edit_product(
    message: types.Message, state: FSMContext, current_user: Optional[User] = None
):
    await state.clear()

    async with get_session() as session:
        store = await _load_merchant_store(message, session, current_user)
        if not store:
            return
        products = await ProductService(session).get_products(store.id)

    if not products:
        await message.answer("Não há produtos para editar.")
        return

    await state.update_data(store_id=store.id, product_ids=[p.id for p in products])
    await message.answer(
        "Escolha o produto para editar:", reply_markup=_products_keyboard(products)
    )
    await state.set_state(EditProductStates.waiting_product)


@router.message(EditProductStates.waiting_product)
async def process_edit_product_selection(message: types.Message, state: FSMContext):
    data = await state.get_data()
    product_id = _pick_product_id(message.text, data.get("product_ids", []))
    if not product_id:
        await message.answer("Escolha um produto da lista.")
        return

    await state.update_data(product_id=product_id)
    await message.answer(
        "O que deseja alterar?", reply_markup=_choice_keyboard(PRODUCT_FIELDS)
    )
    await state.set_state(EditProductStates.waiting_field)


@router.message(EditProductStates.waiting_field)
async def process_edit_product_field(message: types.Message, state: FSMContext):
    field = PRODUCT_FIELDS.get((message.text or "").strip())
    if not field:
        await message.answer(
            "Escolha um campo no teclado.", reply_markup=_choice_keyboard(PRODUCT_FIELDS)
        )
        return

    await state.update_data(edit_field=field)
    if field == "featured":
        await message.answer("Produto em destaque?", reply_markup=_yes_no_keyboard())
    elif field == "image_url":
        await message.answer(
            f"Nova URL da imagem (ou {SKIP_MARK } para usar uma imagem padrão):",
            reply_markup=types.ReplyKeyboardRemove(),
        )
    else:
        await message.answer(
            "Informe o novo valor:", reply_markup=types.ReplyKeyboardRemove()
        )
    await state.set_state(EditProductStates.waiting_value)


@router.message(EditProductStates.waiting_value)
async def process_edit_product_value(message: types.Message, state: FSMContext):
    data = await state.get_data()
    field = data.get("edit_field")
    text = (message.text or "").strip()

    try:
        if field == "price":
            patch = ProductPatch(price=validate_price(text))
        elif field == "featured":
            patch = ProductPatch(featured=parse_yes_no(text))
        elif field == "name":
            patch = ProductPatch(name=sanitize_input(text))
        elif field == "image_url":
            patch = ProductPatch(image_url="" if text == SKIP_MARK else text)
        else:
            patch = ProductPatch(description=sanitize_input(text))
    except ValueError as e:
        await message.answer(f"❌ {e }\nInforme o valor novamente:")
        return

    async with get_session() as session:
        product = await ProductService(session).update_product(
            data.get("product_id"), patch
        )

    await state.clear()
    if not product:
        await message.answer(
            "Produto não encontrado.", reply_markup=get_main_keyboard("merchant")
        )
        return

    await invalidate_catalog(product.store_id)
    await message.answer(
        f"✅ Produto atualizado com sucesso: {product .name }",
        reply_markup=get_main_keyboard("merchant"),
    )


@router.message(Command("deleteproduct"))
async def cmd_delete_product(
    message: types.Message, state: FSMContext, current_user: Optional[User] = None
):
    await state.clear()

    async with get_session() as session:
        store = await _load_merchant_store(message, session, current_user)
        if not store:
            return
        products = await ProductService(session).get_products(store.id)

    if not products:
        await message.answer("Não há produtos para excluir.")
        return

    await state.update_data(store_id=store.id, product_ids=[p.id for p in products])
    await message.answer(
        "Escolha o produto para excluir:", reply_markup=_products_keyboard(products)
    )
    await state.set_state(DeleteProductStates.waiting_product)


@router.message(DeleteProductStates.waiting_product)
async def process_delete_product_selection(message: types.Message, state: FSMContext):
    data = await state.get_data()
    product_id = _pick_product_id(message.text, data.get("product_ids", []))
    if not product_id:
        await message.answer("Escolha um produto da lista.")
        return

    await state.update_data(product_id=product_id)
    await message.answer(
        "Tem certeza que deseja excluir este produto?", reply_markup=_yes_no_keyboard()
    )
    await state.set_state(DeleteProductStates.waiting_confirm)


@router.message(DeleteProductStates.waiting_confirm)
async def process_delete_product_confirm(message: types.Message, state: FSMContext):
    data = await state.get_data()
    await state.clear()

    if not parse_yes_no(message.text):
        await message.answer(
            "Exclusão cancelada.", reply_markup=get_main_keyboard("merchant")
        )
        return

    async with get_session() as session:
        deleted = await ProductService(session).delete_product(data.get("product_id"))

    if deleted:
        await invalidate_catalog(data.get("store_id"))
        await message.answer("🗑 Produto removido.", reply_markup=get_main_keyboard("merchant"))
    else:
        await message.answer(
            "Produto não encontrado.", reply_markup=get_main_keyboard("merchant")
        )


@router.message(Command("settings"))
async def cmd_settings(
    message: types.Message, state: FSMContext, current_user: Optional[User] = None
):
    await state.clear()

    async with get_session() as session:
        store = await _load_merchant_store(message, session, current_user)
        if not store:
            return

    await state.update_data(store_id=store.id)
    await message.answer(
        f"Configurações da loja\n\nNome: {store .name }\n"
        f"WhatsApp: {store .whatsapp or 'não configurado'}\nCor: {store .color }\n\n"
        "O que deseja alterar?",
        reply_markup=_choice_keyboard(SETTINGS_FIELDS),
    )
    await state.set_state(StoreSettingsStates.waiting_field)


@router.message(StoreSettingsStates.waiting_field)
async def process_settings_field(message: types.Message, state: FSMContext):
    field = SETTINGS_FIELDS.get((message.text or "").strip())
    if not field:
        await message.answer(
            "Escolha um campo no teclado.",
            reply_markup=_choice_keyboard(SETTINGS_FIELDS),
        )
        return

    hints = {
        "name": "Novo nome da loja:",
        "whatsapp": "Número do WhatsApp com DDD (ex.: 11999998888):",
        "color": "Cor da marca em hexadecimal (ex.: #2563eb):",
    }
    await state.update_data(edit_field=field)
    await message.answer(hints[field], reply_markup=types.ReplyKeyboardRemove())
    await state.set_state(StoreSettingsStates.waiting_value)


@router.message(StoreSettingsStates.waiting_value)
async def process_settings_value(message: types.Message, state: FSMContext):
    data = await state.get_data()
    field = data.get("edit_field")
    text = (message.text or "").strip()

    if field == "name":
        if not is_valid_store_name(text):
            await message.answer("Nome de loja inválido. Tente outro:")
            return
        patch = StorePatch(name=text)
    elif field == "whatsapp":
        try:
            patch = StorePatch(whatsapp=normalize_whatsapp(text))
        except ValueError as e:
            await message.answer(f"❌ {e }\nInforme o número novamente:")
            return
    else:
        if not is_valid_color(text):
            await message.answer("Cor inválida. Use o formato #RRGGBB:")
            return
        patch = StorePatch(color=text.lower())

    async with get_session() as session:
        store = await StoreService(session).update_store(data.get("store_id"), patch)

    await state.clear()
    if not store:
        await message.answer("Loja não encontrada.", reply_markup=get_main_keyboard("merchant"))
        return

    await message.answer(
        "✅ Configurações da loja salvas.", reply_markup=get_main_keyboard("merchant")
    )


@router.message(Command("subscription"))
async def cmd_subscription(
    message: types.Message, state: FSMContext, current_user: Optional[User] = None
):
    await state.clear()

    async with get_session() as session:
        store = await _load_merchant_store(
            message, session, current_user, require_active=False
        )
        if not store:
            return
        config = await ConfigService(session).get_config()

    lines = [
        f"💳 Assinatura {PLAN_LABELS .get (store .plan ,store .plan )}",
        f"Status atual: {format_status (store .status )}",
        f"Valor do plano: {format_price (PLAN_PRICES .get (store .plan ,0 ))}",
        "",
        f"Chave Pix para pagamento: {config .admin_pix_key }",
    ]
    if store.is_active:
        lines += ["", "✅ Sua loja está ativa e pronta para vender!"]
    else:
        lines += [
            "",
            "Após o pagamento, envie o comprovante para o suporte. "
            "Sua loja será liberada em instantes.",
            "Modo demo: /simulatepayment",
        ]

    await message.answer("\n".join(lines), reply_markup=get_main_keyboard("merchant"))


@router.message(Command("simulatepayment"))
async def cmd_simulate_payment(
    message: types.Message, state: FSMContext, current_user: Optional[User] = None
):
    await state.clear()

    async with get_session() as session:
        store = await _load_merchant_store(
            message, session, current_user, require_active=False
        )
        if not store:
            return

    if store.is_active:
        await message.answer("Sua loja já está ativa.")
        return

    await state.update_data(store_id=store.id)
    await message.answer(
        "Simular envio de comprovante e aprovação automática? (Modo Demo)",
        reply_markup=_yes_no_keyboard(),
    )
    await state.set_state(PaymentStates.waiting_confirm)


@router.message(PaymentStates.waiting_confirm)
async def process_simulate_payment(message: types.Message, state: FSMContext):
    data = await state.get_data()
    await state.clear()

    if not parse_yes_no(message.text):
        await message.answer("Operação cancelada.", reply_markup=get_main_keyboard("merchant"))
        return

    async with get_session() as session:
        store = await StoreService(session).simulate_payment(data.get("store_id"))

    if not store:
        await message.answer("Loja não encontrada.", reply_markup=get_main_keyboard("merchant"))
        return

    await message.answer(
        f"✅ Pagamento aprovado! Loja liberada.\nLoja online: {storefront_link (store .id )}",
        reply_markup=get_main_keyboard("merchant"),
    )
