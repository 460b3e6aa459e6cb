from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional


@dataclass
class CartItem:
    id: str
    store_id: str
    name: str
    price: float
    image_url: str = ""
    featured: bool = False
    description: Optional[str] = ""
    quantity: int = 1

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity


class Cart:
    """
    Корзина покупателя. Нигде не сохраняется в БД: между сообщениями живет в
    данных FSM через to_state()/from_state().
    """

    def __init__(self, items: Optional[List[CartItem]] = None):
        self.items: List[CartItem] = list(items or [])

    def _find(self, product_id: str) -> Optional[CartItem]:
        return next((i for i in self.items if i.id == product_id), None)

    def add(self, product) -> CartItem:
        """
        Добавить товар (модель Product или её to_dict()). Повторное добавление
        того же товара увеличивает количество.
        """
        data = product if isinstance(product, dict) else product.to_dict()
        existing = self._find(data["id"])
        if existing:
            existing.quantity += 1
            return existing
        item = CartItem(
            id=data["id"],
            store_id=data["store_id"],
            name=data["name"],
            price=float(data["price"]),
            image_url=data.get("image_url") or "",
            featured=bool(data.get("featured")),
            description=data.get("description"),
        )
        self.items.append(item)
        return item

    def remove(self, product_id: str) -> None:
        self.items = [i for i in self.items if i.id != product_id]

    def change_quantity(self, product_id: str, delta: int) -> None:
        item = self._find(product_id)
        if item:
            item.quantity = max(1, item.quantity + delta)

    def clear(self) -> None:
        self.items = []

    @property
    def total(self) -> float:
        return sum(i.subtotal for i in self.items)

    @property
    def count(self) -> int:
        return sum(i.quantity for i in self.items)

    def is_empty(self) -> bool:
        return not self.items

    def to_state(self) -> List[Dict[str, Any]]:
        return [asdict(i) for i in self.items]

    @classmethod
    def from_state(cls, data: Optional[List[Dict[str, Any]]]) -> "Cart":
        return cls([CartItem(**row) for row in data or []])
