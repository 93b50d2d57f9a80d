"""Static diameter-class catalog."""

from .specs import DiameterSpec, SpecCatalog, load_catalog, load_default_catalog

__all__ = ["DiameterSpec", "SpecCatalog", "load_catalog", "load_default_catalog"]
