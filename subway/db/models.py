from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


class Station(Base):
    __tablename__ = "stations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)


class Line(Base):
    __tablename__ = "lines"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    color: Mapped[str] = mapped_column(String(64), nullable=False)
    up_station_id: Mapped[int] = mapped_column(Integer, ForeignKey("stations.id"), nullable=False)
    down_station_id: Mapped[int] = mapped_column(Integer, ForeignKey("stations.id"), nullable=False)
    distance: Mapped[int] = mapped_column(Integer, nullable=False)

    up_station: Mapped["Station"] = relationship(foreign_keys=[up_station_id])
    down_station: Mapped["Station"] = relationship(foreign_keys=[down_station_id])
