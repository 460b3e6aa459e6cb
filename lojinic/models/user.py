from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class User:
    """Пользователь сессии. Отдельной таблицы нет, данные живут в AccountSession."""

    uid: str
    email: str
    is_admin: bool
    display_name: Optional[str] = None

    @property
    def role(self) -> str:
        return "admin" if self.is_admin else "merchant"
