from aiogram import types
from aiogram.utils.keyboard import ReplyKeyboardBuilder

ADMIN_MENU_TEXT = """
🛡 <b>Console do administrador</b>

Comandos disponíveis:
/stores - Listar lojas (use /stores termo para buscar)
/togglestore - Ativar ou suspender uma loja
/pix - Alterar a chave Pix de recebimento
/logout - Sair
/help - Mostrar esta mensagem
"""

MERCHANT_MENU_TEXT = """
🏪 <b>Painel do lojista</b>

Comandos disponíveis:
/mystore - Resumo da loja e link público
/products - Listar produtos
/addproduct - Adicionar produto
/editproduct - Editar produto
/deleteproduct - Excluir produto
/settings - Nome, WhatsApp e cor da loja
/subscription - Assinatura e chave Pix
/logout - Sair
/help - Mostrar esta mensagem

Produtos e configurações ficam bloqueados até a loja ser ativada.
"""

SHOPPER_MENU_TEXT = """
🛍 <b>Vitrine</b>

/catalog - Ver todos os produtos
/featured - Ver destaques
/search - Buscar produto
/cart - Ver sacola
/checkout - Finalizar pedido pelo WhatsApp

Envie o nome de um produto para ver os detalhes.
"""

GUEST_MENU_TEXT = """
👋 <b>Bem-vindo ao LojinIC</b>

Crie sua loja online e venda pelo WhatsApp.
/register - Criar conta e loja
/login - Entrar
/help - Mostrar esta mensagem
"""


def get_main_keyboard(role: str = None):
    """Создает клавиатуру в зависимости от роли пользователя"""
    builder = ReplyKeyboardBuilder()

    if role == "admin":
        builder.row(
            types.KeyboardButton(text="/stores"),
            types.KeyboardButton(text="/togglestore"),
        )
        builder.row(types.KeyboardButton(text="/pix"), types.KeyboardButton(text="/logout"))
    elif role == "merchant":
        builder.row(
            types.KeyboardButton(text="/mystore"), types.KeyboardButton(text="/products")
        )
        builder.row(
            types.KeyboardButton(text="/addproduct"),
            types.KeyboardButton(text="/editproduct"),
        )
        builder.row(
            types.KeyboardButton(text="/deleteproduct"),
            types.KeyboardButton(text="/settings"),
        )
        builder.row(
            types.KeyboardButton(text="/subscription"),
            types.KeyboardButton(text="/logout"),
        )
    elif role == "shopper":
        builder.row(
            types.KeyboardButton(text="/catalog"), types.KeyboardButton(text="/featured")
        )
        builder.row(
            types.KeyboardButton(text="/search"), types.KeyboardButton(text="/cart")
        )
    else:
        builder.row(
            types.KeyboardButton(text="/register"), types.KeyboardButton(text="/login")
        )
        builder.row(types.KeyboardButton(text="/help"))

    return builder.as_markup(resize_keyboard=True)


def get_menu_text(role: str = None):
    """Возвращает текст меню в зависимости от роли пользователя"""
    if role == "admin":
        return ADMIN_MENU_TEXT
    elif role == "merchant":
        return MERCHANT_MENU_TEXT
    elif role == "shopper":
        return SHOPPER_MENU_TEXT
    else:
        return GUEST_MENU_TEXT
