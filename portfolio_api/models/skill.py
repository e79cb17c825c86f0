from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, String

from portfolio_api.database import Base


class Skill(Base):
    __tablename__ = "skills"
    __table_args__ = (CheckConstraint("level >= 0 AND level <= 100", name="ck_skills_level"),)

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    level = Column(Integer, nullable=False)
    category = Column(String(100), nullable=True)
    icon = Column(String(100), nullable=True)
    is_featured = Column(Boolean, default=False, nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
