import pytest
from aiogram.filters import CommandObject

from lojinic.handlers.auth_handler import (
    cmd_start,
    cmd_help,
    cmd_login,
    process_login_email,
    process_login_password,
    cmd_register,
    process_register_email,
    process_register_password,
    process_register_store_name,
    process_register_plan,
    process_register_plan_invalid,
    cmd_logout,
    AUTH_FAILED_TEXT,
)
from lojinic.core.states import LoginStates, RegisterStates, StorefrontStates
from lojinic.services.account_service import AccountService
from lojinic.services.store_service import StoreService
from lojinic.models.store import PlanType, StoreStatus


def answered(message):
    return [call.args[0] for call in message.answer.call_args_list]


@pytest.mark.asyncio
async def test_start_guest(create_message, state):
    message = create_message(text="/start")

    await cmd_start(message, state)

    text = message.answer.call_args.args[0]
    assert "/login" in text
    assert "/register" in text
    assert await state.get_state() is None


@pytest.mark.asyncio
async def test_start_logged_in(create_message, state, merchant_user):
    message = create_message(text="/start")

    await cmd_start(message, state, current_user=merchant_user)

    assert "maria" in answered(message)[0]
    assert "/addproduct" in answered(message)[1]


@pytest.mark.asyncio
async def test_start_with_store_deep_link(
    create_message, state, session, patch_session, no_catalog_cache
):
    store = await StoreService(session).create_store("user_maria", "Doces da Maria")
    message = create_message(text=f"/start store_{store .id }")

    with patch_session("lojinic.handlers.storefront_handler"):
        await cmd_start(
            message, state, command=CommandObject(command="start", args=f"store_{store .id }")
        )

    data = await state.get_data()
    assert data["store_id"] == store.id
    assert data["cart"] == []
    assert await state.get_state() == StorefrontStates.browsing.state
    assert "Bem-vindo à Doces da Maria!" in answered(message)


@pytest.mark.asyncio
async def test_start_with_unknown_store(create_message, state, patch_session):
    message = create_message(text="/start store_missing")

    with patch_session("lojinic.handlers.storefront_handler"):
        await cmd_start(
            message, state, command=CommandObject(command="start", args="store_missing")
        )

    message.answer.assert_called_once_with("Loja não encontrada.")
    assert await state.get_data() == {}


@pytest.mark.asyncio
async def test_help_for_shopper(create_message, state):
    await state.update_data(store_id="store_1")
    message = create_message(text="/help")

    await cmd_help(message, state)

    assert "/catalog" in message.answer.call_args.args[0]


@pytest.mark.asyncio
async def test_login_merchant_with_store(
    create_message, state, session, patch_session
):
    await StoreService(session).create_store("user_maria", "Doces da Maria")

    message = create_message(text="/login")
    await cmd_login(message, state)
    assert await state.get_state() == LoginStates.waiting_email.state

    message = create_message(text="bad-email")
    await process_login_email(message, state)
    assert await state.get_state() == LoginStates.waiting_email.state

    message = create_message(text="maria@gmail.com")
    await process_login_email(message, state)
    assert await state.get_state() == LoginStates.waiting_password.state

    message = create_message(text="qualquer-senha")
    with patch_session("lojinic.handlers.auth_handler"):
        await process_login_password(message, state)

    assert await state.get_state() is None
    assert "Doces da Maria" in answered(message)[0]

    user = await AccountService(session).get_current_user(123456789)
    assert user.uid == "user_maria"
    assert user.is_admin is False


@pytest.mark.asyncio
async def test_login_merchant_without_store(
    create_message, state, session, patch_session
):
    await state.update_data(email="joao@gmail.com")
    await state.set_state(LoginStates.waiting_password)

    message = create_message(text="123")
    with patch_session("lojinic.handlers.auth_handler"):
        await process_login_password(message, state)

    assert "/register" in answered(message)[0]


@pytest.mark.asyncio
async def test_login_admin(create_message, state, session, patch_session):
    await state.update_data(email="Admin@LojinIC.com")
    await state.set_state(LoginStates.waiting_password)

    message = create_message(text="x")
    with patch_session("lojinic.handlers.auth_handler"):
        await process_login_password(message, state)

    assert "administrador" in answered(message)[0]
    assert "/togglestore" in answered(message)[1]

    user = await AccountService(session).get_current_user(123456789)
    assert user.uid == "admin_uid"
    assert user.is_admin is True


@pytest.mark.asyncio
async def test_login_empty_email_fails(create_message, state, patch_session):
    await state.set_state(LoginStates.waiting_password)

    message = create_message(text="x")
    with patch_session("lojinic.handlers.auth_handler"):
        await process_login_password(message, state)

    assert answered(message)[0] == AUTH_FAILED_TEXT
    assert await state.get_state() is None


@pytest.mark.asyncio
async def test_register_flow(create_message, state, session, patch_session):
    await cmd_register(create_message(text="/register"), state)
    await process_register_email(create_message(text="maria@gmail.com"), state)
    await process_register_password(create_message(text="segredo"), state)
    await process_register_store_name(create_message(text="Doces da Maria"), state)
    assert await state.get_state() == RegisterStates.waiting_plan.state

    invalid = create_message(text="Semanal")
    await process_register_plan_invalid(invalid, state)
    assert await state.get_state() == RegisterStates.waiting_plan.state

    message = create_message(text="Anual")
    with patch_session("lojinic.handlers.auth_handler"):
        await process_register_plan(message, state)

    assert "Conta criada com sucesso" in answered(message)[0]
    assert await state.get_state() is None

    store = await StoreService(session).get_my_store("user_maria")
    assert store.name == "Doces da Maria"
    assert store.plan == PlanType.ANNUAL.value
    assert store.status == StoreStatus.PENDING.value


@pytest.mark.asyncio
async def test_register_with_blank_store_name_fails(
    create_message, state, session, patch_session
):
    await state.update_data(email="maria@gmail.com", password="x", store_name="")
    await state.set_state(RegisterStates.waiting_plan)

    message = create_message(text="Mensal")
    with patch_session("lojinic.handlers.auth_handler"):
        await process_register_plan(message, state)

    assert answered(message)[0] == AUTH_FAILED_TEXT
    assert await StoreService(session).get_my_store("user_maria") is None


@pytest.mark.asyncio
async def test_logout(create_message, state, session, patch_session):
    await AccountService(session).login(123456789, "maria@gmail.com", "x")

    message = create_message(text="/logout")
    with patch_session("lojinic.handlers.auth_handler"):
        await cmd_logout(message, state)

    assert await AccountService(session).get_current_user(123456789) is None
    assert "saiu" in answered(message)[0]


@pytest.mark.asyncio
async def test_register_with_existing_store_welcomes_back(
    create_message, state, session, patch_session
):
    await StoreService(session).create_store("user_maria", "Doces da Maria")

    await state.update_data(
        email="maria@gmail.com", password="x", store_name="Outra Loja"
    )
    await state.set_state(RegisterStates.waiting_plan)

    message = create_message(text="Anual")
    with patch_session("lojinic.handlers.auth_handler"):
        await process_register_plan(message, state)

    assert answered(message)[0] == "✅ Bem-vindo de volta! Loja: Doces da Maria"
    store = await StoreService(session).get_my_store("user_maria")
    assert store.name == "Doces da Maria"
    assert store.plan == PlanType.MONTHLY.value
