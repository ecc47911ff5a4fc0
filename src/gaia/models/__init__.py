"""ORM model registry: import all models so Alembic autogenerate discovers them."""

from gaia.models.geocode import Geocode

__all__ = [
    "Geocode",
]
