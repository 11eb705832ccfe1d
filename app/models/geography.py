"""
Geography reference models: region -> province -> LGU -> barangay.
"""
from sqlalchemy import Column, Integer, String, Index
from app.database import Base


class Region(Base):
    __tablename__ = "regions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(20), nullable=False, unique=True, index=True)
    name = Column(String(150), nullable=False)

    def __repr__(self):
        return f"<Region(code={self.code}, name={self.name})>"


class Province(Base):
    __tablename__ = "provinces"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(20), nullable=False, unique=True, index=True)
    name = Column(String(150), nullable=False)
    region_code = Column(String(20), index=True)

    def __repr__(self):
        return f"<Province(code={self.code}, name={self.name})>"


class Lgu(Base):
    """City or municipality within a province."""
    __tablename__ = "lgus"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(20), nullable=False, unique=True, index=True)
    name = Column(String(150), nullable=False)
    province_code = Column(String(20), nullable=False, index=True)

    def __repr__(self):
        return f"<Lgu(code={self.code}, name={self.name}, province={self.province_code})>"


class Barangay(Base):
    __tablename__ = "barangays"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(20), nullable=False, unique=True, index=True)
    name = Column(String(150), nullable=False)
    province_code = Column(String(20), nullable=False, index=True)
    lgu_code = Column(String(20), nullable=False, index=True)

    __table_args__ = (
        Index('idx_barangay_province_lgu', 'province_code', 'lgu_code'),
    )

    def __repr__(self):
        return f"<Barangay(code={self.code}, name={self.name}, lgu={self.lgu_code})>"
