from typing import Optional
from aiogram import Router, types, F
from aiogram.filters import Command, CommandStart, CommandObject
from aiogram.fsm.context import FSMContext
from aiogram.utils.keyboard import ReplyKeyboardBuilder
from lojinic.core.states import LoginStates, RegisterStates
from lojinic.core.database import get_session
from lojinic.models.store import PlanType
from lojinic.models.user import User
from lojinic.services.account_service import AccountService
from lojinic.services.store_service import StoreService
from lojinic.handlers.storefront_handler import open_storefront
from lojinic.utils.menu import get_menu_text, get_main_keyboard
from lojinic.utils.validators import is_valid_email, is_valid_store_name
import logging

router = Router()
logger = logging.getLogger(__name__)

STORE_DEEP_LINK_PREFIX = "store_"

PLAN_BUTTONS = {
    "Mensal": PlanType.MONTHLY,
    "Anual": PlanType.ANNUAL,
}

AUTH_FAILED_TEXT = "❌ Falha na autenticação. Verifique seus dados."


def _plan_keyboard():
    kb = ReplyKeyboardBuilder()
    for label in PLAN_BUTTONS:
        kb.button(text=label)
    kb.adjust(2)
    return kb.as_markup(resize_keyboard=True)


async def _greet(message: types.Message, user: User, greeting: str):
    await message.answer(greeting, reply_markup=get_main_keyboard(user.role))
    await message.answer(get_menu_text(user.role), parse_mode="HTML")


@router.message(CommandStart())
async def cmd_start(
    message: types.Message,
    state: FSMContext,
    command: Optional[CommandObject] = None,
    current_user: Optional[User] = None,
):
    payload = command.args if command else None

    if payload and payload.startswith(STORE_DEEP_LINK_PREFIX):
        await open_storefront(message, state, payload[len(STORE_DEEP_LINK_PREFIX) :])
        return

    await state.clear()

    if current_user:
        await _greet(
            message,
            current_user,
            f"👋 Olá de novo, {current_user .display_name }!",
        )
        return

    await message.answer(
        get_menu_text(None), parse_mode="HTML", reply_markup=get_main_keyboard(None)
    )


@router.message(Command("help"))
async def cmd_help(
    message: types.Message, state: FSMContext, current_user: Optional[User] = None
):
    data = await state.get_data()
    if current_user:
        role = current_user.role
    elif data.get("store_id"):
        role = "shopper"
    else:
        role = None

    await message.answer(
        get_menu_text(role), parse_mode="HTML", reply_markup=get_main_keyboard(role)
    )


@router.message(Command("login"))
async def cmd_login(message: types.Message, state: FSMContext):
    await state.clear()
    await message.answer(
        "Informe seu e-mail:", reply_markup=types.ReplyKeyboardRemove()
    )
    await state.set_state(LoginStates.waiting_email)


@router.message(LoginStates.waiting_email)
async def process_login_email(message: types.Message, state: FSMContext):
    email = (message.text or "").strip()
    if not is_valid_email(email):
        await message.answer("E-mail inválido. Tente novamente:")
        return

    await state.update_data(email=email)
    await message.answer("Informe sua senha:")
    await state.set_state(LoginStates.waiting_password)


@router.message(LoginStates.waiting_password)
async def process_login_password(message: types.Message, state: FSMContext):
    data = await state.get_data()
    email = data.get("email", "")

    try:
        async with get_session() as session:
            user = await AccountService(session).login(
                message.chat.id, email, message.text or ""
            )
            store = None
            if not user.is_admin:
                store = await StoreService(session).get_my_store(user.uid)
    except ValueError as e:
        logger.warning("Вход не удался для %s: %s", email, e)
        await message.answer(AUTH_FAILED_TEXT, reply_markup=get_main_keyboard(None))
        await state.clear()
        return

    await state.clear()

    if user.is_admin:
        await _greet(message, user, "✅ Bem-vindo, administrador!")
        return

    if not store:
        await message.answer(
            "Você ainda não tem uma loja. Use /register para criar a sua.",
            reply_markup=get_main_keyboard(None),
        )
        return

    await _greet(message, user, f"✅ Bem-vindo de volta! Loja: {store .name }")


@router.message(Command("register"))
async def cmd_register(message: types.Message, state: FSMContext):
    await state.clear()
    await message.answer(
        "Vamos criar sua loja! Informe seu e-mail:",
        reply_markup=types.ReplyKeyboardRemove(),
    )
    await state.set_state(RegisterStates.waiting_email)


@router.message(RegisterStates.waiting_email)
async def process_register_email(message: types.Message, state: FSMContext):
    email = (message.text or "").strip()
    if not is_valid_email(email):
        await message.answer("E-mail inválido. Tente novamente:")
        return

    await state.update_data(email=email)
    await message.answer("Crie uma senha:")
    await state.set_state(RegisterStates.waiting_password)


@router.message(RegisterStates.waiting_password)
async def process_register_password(message: types.Message, state: FSMContext):
    await state.update_data(password=message.text or "")
    await message.answer("Qual o nome da sua loja?")
    await state.set_state(RegisterStates.waiting_store_name)


@router.message(RegisterStates.waiting_store_name)
async def process_register_store_name(message: types.Message, state: FSMContext):
    name = (message.text or "").strip()
    if name and not is_valid_store_name(name):
        await message.answer("Nome de loja inválido. Tente outro:")
        return

    await state.update_data(store_name=name)
    await message.answer("Escolha o plano:", reply_markup=_plan_keyboard())
    await state.set_state(RegisterStates.waiting_plan)


@router.message(RegisterStates.waiting_plan, F.text.in_(PLAN_BUTTONS))
async def process_register_plan(message: types.Message, state: FSMContext):
    data = await state.get_data()
    plan = PLAN_BUTTONS[message.text]

    try:
        async with get_session() as session:
            user = await AccountService(session).login(
                message.chat.id, data.get("email", ""), data.get("password", "")
            )
            store_service = StoreService(session)
            existing = await store_service.get_my_store(user.uid)
            store = await store_service.create_store(
                user.uid, data.get("store_name", ""), plan
            )
    except ValueError as e:
        logger.warning("Регистрация не удалась: %s", e)
        await message.answer(AUTH_FAILED_TEXT, reply_markup=get_main_keyboard(None))
        await state.clear()
        return

    await state.clear()

    if existing:
        # У владельца уже есть магазин, новый не создается
        await _greet(message, user, f"✅ Bem-vindo de volta! Loja: {store .name }")
        return

    logger.info("Зарегистрирован продавец %s, магазин %s", user.uid, store.id)
    await _greet(
        message,
        user,
        f"✅ Conta criada com sucesso! Loja {store .name } aguardando ativação.",
    )


@router.message(RegisterStates.waiting_plan)
async def process_register_plan_invalid(message: types.Message, state: FSMContext):
    await message.answer(
        "Escolha um dos planos no teclado:", reply_markup=_plan_keyboard()
    )


@router.message(Command("logout"))
async def cmd_logout(message: types.Message, state: FSMContext):
    async with get_session() as session:
        await AccountService(session).logout(message.chat.id)

    await state.clear()
    await message.answer("Você saiu da sua conta.", reply_markup=get_main_keyboard(None))
