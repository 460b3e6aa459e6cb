import re
import logging
from typing import Optional
from aiogram import Router, types
from aiogram.filters import Command, CommandObject
from aiogram.fsm.context import FSMContext
from aiogram.utils.keyboard import ReplyKeyboardBuilder

from lojinic.core.database import get_session
from lojinic.core.states import ToggleStoreStates, PixKeyStates
from lojinic.models.store import StoreStatus
from lojinic.models.user import User
from lojinic.services.store_service import StoreService
from lojinic.services.config_service import ConfigService
from lojinic.utils.formatting import format_status, PLAN_LABELS
from lojinic.utils.menu import get_main_keyboard
from lojinic.utils.permissions import is_admin

router = Router()
logger = logging.getLogger(__name__)

NO_RIGHTS_TEXT = "Você não tem permissão de administrador para este comando."

_INDEX_RE = re.compile(r"^(\d+)\.")


@router.message(Command("stores"))
async def cmd_list_stores(
    message: types.Message,
    state: FSMContext,
    command: Optional[CommandObject] = None,
    current_user: Optional[User] = None,
):
    """Список магазинов с необязательным поиском по названию: /stores термин"""
    if not is_admin(current_user):
        await message.answer(NO_RIGHTS_TEXT)
        return

    await state.clear()
    term = (command.args or "").strip() if command else ""

    async with get_session() as session:
        store_service = StoreService(session)
        stats = await store_service.get_stats()
        stores = await store_service.search_stores(term)

    lines = [
        "📊 Métricas globais",
        f"Lojas totais: {stats ['total']}",
        f"Ativas: {stats ['active']}",
        "",
    ]
    if term:
        lines.append(f'Busca: "{term }"')

    if not stores:
        lines.append("Nenhuma loja encontrada.")
    for store in stores:
        lines.append(
            f"• {store .name } - {format_status (store .status )} - "
            f"{PLAN_LABELS .get (store .plan ,store .plan )} - "
            f"WhatsApp: {store .whatsapp or '-'}"
        )

    await message.answer("\n".join(lines), reply_markup=get_main_keyboard("admin"))


@router.message(Command("togglestore"))
async def cmd_toggle_store(
    message: types.Message, state: FSMContext, current_user: Optional[User] = None
):
    if not is_admin(current_user):
        await message.answer(NO_RIGHTS_TEXT)
        return

    await state.clear()

    async with get_session() as session:
        stores = await StoreService(session).get_all_stores()

    if not stores:
        await message.answer("Nenhuma loja cadastrada.")
        return

    kb = ReplyKeyboardBuilder()
    for i, store in enumerate(stores, 1):
        kb.button(text=f"{i }. {store .name } ({format_status (store .status )})")
    kb.adjust(1)

    await state.update_data(store_ids=[s.id for s in stores])
    await message.answer(
        "Escolha a loja para ativar/suspender:",
        reply_markup=kb.as_markup(resize_keyboard=True),
    )
    await state.set_state(ToggleStoreStates.waiting_store)


@router.message(ToggleStoreStates.waiting_store)
async def process_toggle_store(message: types.Message, state: FSMContext):
    data = await state.get_data()
    store_ids = data.get("store_ids", [])

    match = _INDEX_RE.match((message.text or "").strip())
    if not match or not 1 <= int(match.group(1)) <= len(store_ids):
        await message.answer("Escolha uma loja da lista.")
        return

    async with get_session() as session:
        store = await StoreService(session).toggle_status(
            store_ids[int(match.group(1)) - 1]
        )

    await state.clear()
    if not store:
        await message.answer("Loja não encontrada.", reply_markup=get_main_keyboard("admin"))
        return

    logger.info("Администратор перевел магазин %s в статус %s", store.id, store.status)
    icon = "✅" if store.status == StoreStatus.ACTIVE.value else "⚠️"
    await message.answer(
        f"{icon } Loja {store .name } agora está {format_status (store .status )}.",
        reply_markup=get_main_keyboard("admin"),
    )


@router.message(Command("pix"))
async def cmd_pix(
    message: types.Message, state: FSMContext, current_user: Optional[User] = None
):
    if not is_admin(current_user):
        await message.answer(NO_RIGHTS_TEXT)
        return

    await state.clear()

    async with get_session() as session:
        config = await ConfigService(session).get_config()

    await message.answer(
        f"Chave Pix de recebimento atual: {config .admin_pix_key }\n\n"
        "Esta chave é exibida para todos os lojistas pendentes.\n"
        "Informe a nova chave:",
        reply_markup=types.ReplyKeyboardRemove(),
    )
    await state.set_state(PixKeyStates.waiting_key)


@router.message(PixKeyStates.waiting_key)
async def process_pix_key(message: types.Message, state: FSMContext):
    key = (message.text or "").strip()
    if not key:
        await message.answer("A chave Pix não pode ficar vazia. Informe a nova chave:")
        return

    async with get_session() as session:
        await ConfigService(session).update_config(key)

    await state.clear()
    await message.answer(
        "✅ Chave Pix do sistema atualizada.", reply_markup=get_main_keyboard("admin")
    )
