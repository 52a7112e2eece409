from sqlalchemy import Column, String, Text, Integer, ForeignKey
from sqlalchemy.orm import relationship

from app.db.base import BaseModel


class Node(BaseModel):
    """Единица контента; тип (bundle) определяет ее вид: article, page и т.д."""
    __tablename__ = "nodes"
    
    type = Column(String(32), index=True, nullable=False)
    title = Column(String(255), nullable=False)
    body_value = Column(Text, default="")
    body_format = Column(String(64), default="basic_html")
    status = Column(Integer, default=1, nullable=False)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    
    # Relationships
    owner = relationship("User", back_populates="nodes")
