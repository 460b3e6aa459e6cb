from aiogram.fsm.state import State, StatesGroup


class LoginStates(StatesGroup):
    waiting_email = State()
    waiting_password = State()


class RegisterStates(StatesGroup):
    waiting_email = State()
    waiting_password = State()
    waiting_store_name = State()
    waiting_plan = State()


class AddProductStates(StatesGroup):
    waiting_name = State()
    waiting_price = State()
    waiting_image = State()
    waiting_featured = State()
    waiting_description = State()


class EditProductStates(StatesGroup):
    waiting_product = State()
    waiting_field = State()
    waiting_value = State()


class DeleteProductStates(StatesGroup):
    waiting_product = State()
    waiting_confirm = State()


class StoreSettingsStates(StatesGroup):
    waiting_field = State()
    waiting_value = State()


class PaymentStates(StatesGroup):
    waiting_confirm = State()


class ToggleStoreStates(StatesGroup):
    waiting_store = State()


class PixKeyStates(StatesGroup):
    waiting_key = State()


class StorefrontStates(StatesGroup):
    browsing = State()
    waiting_search = State()
    viewing_product = State()
    viewing_cart = State()
    waiting_customer_name = State()
    waiting_payment_method = State()
