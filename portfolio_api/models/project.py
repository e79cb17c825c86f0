from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, String, Text

from portfolio_api.database import Base


class Project(Base):
    __tablename__ = "projects"
    __table_args__ = (
        CheckConstraint(
            "status IN ('completed', 'in_progress', 'planned')", name="ck_projects_status"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    long_description = Column(Text, nullable=True)
    technologies = Column(Text, nullable=True)  # JSON array
    image_url = Column(String(500), nullable=True)
    gallery_images = Column(Text, nullable=True)  # JSON array
    github_url = Column(String(500), nullable=True)
    demo_url = Column(String(500), nullable=True)
    is_featured = Column(Boolean, default=False, nullable=False)
    status = Column(String(20), default="completed", nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
