"""Geocode model: append-only cache of provider addresses keyed by query coordinate."""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from gaia.models.base import Base


class Geocode(Base):
    """One provider address returned for a normalized query coordinate.

    ``lat``/``lon`` hold the five-decimal query key, not the address's own
    position. Rows are never updated or deleted and duplicates are allowed.
    """

    __tablename__ = "geocode"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    lat: Mapped[str] = mapped_column(String, nullable=False)
    lon: Mapped[str] = mapped_column(String, nullable=False)
    address: Mapped[dict] = mapped_column(JSON, nullable=False)
    cached_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (Index("ix_geocode_lat_lon", "lat", "lon"),)
