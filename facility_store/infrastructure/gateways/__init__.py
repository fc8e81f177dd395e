"""
Gateways Package - Infrastructure Layer

Concrete implementations of the gateway interfaces defined in the domain
layer.
"""

from .document_store_gateway import HttpDocumentStoreGateway, document_path

__all__ = ["HttpDocumentStoreGateway", "document_path"]
