from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String, func

from app.core.database import Base


class Coupon(Base):
    __tablename__ = "coupons"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    percent = Column(Integer, nullable=False)
    is_active = Column(Boolean, nullable=False, default=False)
    created = Column(DateTime(timezone=True), nullable=True)
    last_updated = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<Coupon id={self.id} name={self.name!r} percent={self.percent}>"


# Names are unique regardless of case.
Index("uq_coupons_name_lower", func.lower(Coupon.name), unique=True)
