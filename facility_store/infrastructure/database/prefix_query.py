"""
Prefix Query Engine - Infrastructure Layer

Emulates "list all children of X" on a store without hierarchical indexes by
selecting an ID range with the store's ``_find`` endpoint. Results follow the
store's native key order. The store caps every query at ``limit`` documents;
larger collections are truncated, which is reported in the log rather than
papered over with paging.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from facility_store.domain.gateways.document_store_gateway import (
    IDocumentStoreGateway,
)
from facility_store.domain.services.identifier_scheme import (
    DEFAULT_ID_SCHEME,
    HierarchicalIdScheme,
)
from facility_store.shared import get_logger

logger = get_logger(__name__)

#: Lowest possible key; ``$gt`` this selects every document.
LOWEST_KEY = "\x00"


@dataclass(frozen=True)
class IDRangeQuery:
    """An exclusive ``_id`` range with a result limit."""

    gt: str
    lt: Optional[str] = None
    limit: int = 1000

    def to_payload(self) -> Dict[str, Any]:
        bounds: Dict[str, str] = {"$gt": self.gt}
        if self.lt is not None:
            bounds["$lt"] = self.lt
        return {"selector": {"_id": bounds}, "limit": self.limit}


class PrefixQueryEngine:
    """Builds and runs ID range queries through the document store gateway."""

    def __init__(
        self,
        gateway: IDocumentStoreGateway,
        scheme: HierarchicalIdScheme = DEFAULT_ID_SCHEME,
        page_size: int = 1000,
        scan_limit: int = 5000,
    ):
        """
        Args:
            gateway: Document store gateway
            scheme: Identifier scheme providing the child key range
            page_size: Limit for children-of-prefix queries
            scan_limit: Default limit for whole-collection scans
        """
        self.gateway = gateway
        self.scheme = scheme
        self.page_size = page_size
        self.scan_limit = scan_limit

    def children_query(self, prefix: str, limit: Optional[int] = None) -> IDRangeQuery:
        gt, lt = self.scheme.children_range(prefix)
        return IDRangeQuery(gt=gt, lt=lt, limit=limit or self.page_size)

    def all_query(self, limit: Optional[int] = None) -> IDRangeQuery:
        return IDRangeQuery(gt=LOWEST_KEY, limit=limit or self.scan_limit)

    async def find(self, collection: str, query: IDRangeQuery) -> List[Dict[str, Any]]:
        """Run ``query`` against ``collection`` and return the raw documents."""
        response = await self.gateway.execute(
            "POST", f"{collection}/_find", body=query.to_payload()
        )
        docs = list((response or {}).get("docs") or [])

        if len(docs) >= query.limit:
            logger.warning(
                "prefix_query.possibly_truncated",
                collection=collection,
                gt=query.gt,
                lt=query.lt,
                limit=query.limit,
            )
        return docs

    async def find_children(
        self, collection: str, prefix: str, limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        return await self.find(collection, self.children_query(prefix, limit))

    async def find_all(
        self, collection: str, limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        return await self.find(collection, self.all_query(limit))
