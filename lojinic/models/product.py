from datetime import datetime
from sqlalchemy import Column, String, Float, Boolean, DateTime, Text
from lojinic.core.database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(String, primary_key=True, index=True)
    # Без внешнего ключа: существование магазина не проверяется
    store_id = Column(String, index=True, nullable=False)
    name = Column(String, nullable=False)
    price = Column(Float, nullable=False, default=0.0)
    image_url = Column(String, nullable=False, default="")
    featured = Column(Boolean, nullable=False, default=False)
    description = Column(Text, nullable=True, default="")
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "store_id": self.store_id,
            "name": self.name,
            "price": self.price,
            "image_url": self.image_url,
            "featured": self.featured,
            "description": self.description,
        }
