# carefund/repos/inmemory.py
from copy import deepcopy
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from bson import ObjectId

from carefund.core.errors import InvalidArgument, NotFound
from carefund.repos.kinds import KINDS, timestamp_field


def _id() -> str:
    return str(ObjectId())


def _matches(doc: dict, flt: Optional[dict]) -> bool:
    return all(doc.get(k) == v for k, v in (flt or {}).items())


class InMemoryStore:
    """
    Dict-backed entity store with the same contract as MongoStore.

    Every method runs without awaiting anything, so on a single event loop each
    call is atomic (find_or_create and conditional updates included).
    """

    def __init__(self):
        self.tables: Dict[str, Dict[str, dict]] = {k: {} for k in KINDS}

    def _table(self, kind: str) -> Dict[str, dict]:
        timestamp_field(kind)
        return self.tables[kind]

    @staticmethod
    def _check_id(doc_id: str):
        if not isinstance(doc_id, str) or not ObjectId.is_valid(doc_id):
            raise InvalidArgument(f"Invalid id: {doc_id!r}")

    async def create(self, kind: str, record: dict) -> dict:
        table = self._table(kind)
        doc = deepcopy(record)
        doc["id"] = _id()
        doc.setdefault(timestamp_field(kind), datetime.now(timezone.utc))
        table[doc["id"]] = doc
        return deepcopy(doc)

    async def find(self, kind: str, filter: Optional[dict] = None, sort_newest: bool = True) -> List[dict]:
        # reversed() so that equal timestamps still list the latest insert first
        docs = [d for d in reversed(list(self._table(kind).values())) if _matches(d, filter)]
        if sort_newest:
            ts = timestamp_field(kind)
            docs.sort(key=lambda d: d[ts], reverse=True)
        return [deepcopy(d) for d in docs]

    async def find_by_id(self, kind: str, doc_id: str) -> Optional[dict]:
        self._check_id(doc_id)
        doc = self._table(kind).get(doc_id)
        return deepcopy(doc) if doc else None

    async def update(self, kind: str, doc_id: str, fields: dict, where: Optional[dict] = None) -> Optional[dict]:
        self._check_id(doc_id)
        doc = self._table(kind).get(doc_id)
        if doc is None:
            raise NotFound(f"{kind[:-1].capitalize()} not found")
        if not _matches(doc, where):
            return None
        doc.update(deepcopy(fields))
        return deepcopy(doc)

    async def find_or_create(self, kind: str, key: dict, record: dict) -> Tuple[dict, bool]:
        for doc in self._table(kind).values():
            if _matches(doc, key):
                return deepcopy(doc), False
        return await self.create(kind, {**record, **key}), True

    async def count(self, kind: str, filter: Optional[dict] = None) -> int:
        return sum(1 for d in self._table(kind).values() if _matches(d, filter))
