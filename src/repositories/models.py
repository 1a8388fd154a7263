"""데이터베이스 모델"""
from sqlalchemy import Column, Integer, Numeric, String, Text

from src.core.database import Base


class DepCategory(Base):
    """감가 카테고리 테이블 (읽기 전용으로 사용)"""

    __tablename__ = "dep_categories"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(8), nullable=True, index=True)  # ELC, FRN 등
    name = Column(String(128), nullable=False, unique=True)
    annual_depreciation_rate = Column(Numeric(6, 4), nullable=False, default=0)
    useful_life = Column(String(16), nullable=True)  # "10 years" 같은 원문
    examples_text = Column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<DepCategory(id={self.id}, name={self.name}, rate={self.annual_depreciation_rate})>"
