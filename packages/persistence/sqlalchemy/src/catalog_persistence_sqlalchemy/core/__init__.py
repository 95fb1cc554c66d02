from .model_mapper import ModelMapper
from .models import CatalogBase, ProductModel
from .repository import SQLAlchemyRepository

__all__ = ["CatalogBase", "ModelMapper", "ProductModel", "SQLAlchemyRepository"]
