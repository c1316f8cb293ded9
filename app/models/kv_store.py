from sqlalchemy import Column, String, JSON

from app.core.db import Base


class KVEntry(Base):
    __tablename__ = "kv_store"

    key = Column(String(255), primary_key=True, index=True)
    value = Column(JSON, nullable=True)

    def __repr__(self):
        return f"<KVEntry key={self.key}>"
