import asyncio
import logging
import sys
from pathlib import Path
from aiogram import Bot, Dispatcher
from aiogram.fsm.storage.redis import RedisStorage

# Добавляем корень проекта в PYTHONPATH
sys.path.append(str(Path(__file__).resolve().parent.parent))

from lojinic.core.config import BOT_TOKEN, REDIS_DSN
from lojinic.core.database import engine, Base
from lojinic.handlers.auth_handler import router as auth_router
from lojinic.handlers.admin_handler import router as admin_router
from lojinic.handlers.merchant_handler import router as merchant_router
from lojinic.handlers.storefront_handler import router as storefront_router
from lojinic.middleware import CurrentUserMiddleware
import lojinic.models  # noqa: F401  регистрирует таблицы в Base.metadata


async def on_startup():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def main():
    # Корзины и шаги диалогов переживают перезапуск бота
    storage = RedisStorage.from_url(REDIS_DSN)

    bot = Bot(token=BOT_TOKEN)
    await bot.delete_webhook(drop_pending_updates=True)

    dp = Dispatcher(storage=storage)
    dp.message.middleware(CurrentUserMiddleware())

    # Витрина последней: её обработчики свободного текста завязаны на состояние
    dp.include_router(auth_router)
    dp.include_router(admin_router)
    dp.include_router(merchant_router)
    dp.include_router(storefront_router)

    async def global_error_handler(exception: Exception, update: object = None) -> bool:
        logging.getLogger("aiogram").error("Exception %s, update %s", exception, update)
        return True

    dp.errors.register(global_error_handler)

    await on_startup()
    await dp.start_polling(bot)


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    asyncio.run(main())
