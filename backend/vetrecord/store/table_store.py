"""
Table store: filtered reads with eager joins, and insert/update/delete by id,
on top of Motor collections.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from ..database import Database
from ..exceptions import RemoteQueryError
from .predicates import Predicate, combine


@dataclass(frozen=True)
class Join:
    """Eagerly load related records from another table.

    With ``many=False`` the related record is embedded as a single document
    (or left out when there is none); with ``many=True`` as a list.
    """
    table: str
    local_field: str
    as_field: str
    foreign_field: str = "_id"
    many: bool = False

    def stages(self) -> List[Dict[str, Any]]:
        stages = [{
            "$lookup": {
                "from": self.table,
                "localField": self.local_field,
                "foreignField": self.foreign_field,
                "as": self.as_field
            }
        }]
        if not self.many:
            stages.append({
                "$unwind": {"path": f"${self.as_field}", "preserveNullAndEmptyArrays": True}
            })
        return stages


def to_object_id(record_id: Any) -> Optional[ObjectId]:
    """Parse a record id, returning None when it is malformed."""
    if isinstance(record_id, ObjectId):
        return record_id
    try:
        return ObjectId(record_id)
    except (InvalidId, TypeError):
        return None


def normalize(value: Any) -> Any:
    """Turn ObjectIds into strings throughout a document."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {k: normalize(v) for k, v in value.items()}
    if isinstance(value, list):
        return [normalize(v) for v in value]
    return value


class TableStore:
    """CRUD access to named tables. Store failures raise RemoteQueryError."""

    def __init__(self, get_collection: Callable[[str], Any] = None):
        self._get_collection = get_collection or Database.get_collection

    def collection(self, table: str):
        return self._get_collection(table)

    async def query_table(
        self,
        table: str,
        filters: Iterable[Predicate] = (),
        joins: Sequence[Join] = (),
        sort: Optional[Sequence[Tuple[str, int]]] = None
    ) -> List[Dict[str, Any]]:
        """Read every record matching all predicates, in one request."""
        pipeline: List[Dict[str, Any]] = [{"$match": combine(filters)}]
        for join in joins:
            pipeline.extend(join.stages())
        if sort:
            pipeline.append({"$sort": dict(sort)})
        return await self._aggregate(table, pipeline, "select")

    async def get_record(
        self,
        table: str,
        record_id: Any,
        joins: Sequence[Join] = ()
    ) -> Optional[Dict[str, Any]]:
        """Read one record by id; None when missing or the id is malformed."""
        oid = to_object_id(record_id)
        if oid is None:
            return None

        pipeline: List[Dict[str, Any]] = [{"$match": {"_id": oid}}]
        for join in joins:
            pipeline.extend(join.stages())
        pipeline.append({"$limit": 1})

        records = await self._aggregate(table, pipeline, "select")
        return records[0] if records else None

    async def insert_record(self, table: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a record and return it with its new id."""
        doc = dict(fields)
        try:
            result = await self.collection(table).insert_one(doc)
        except PyMongoError as exc:
            raise RemoteQueryError(table, "insert", exc) from exc

        doc["_id"] = result.inserted_id
        return normalize(doc)

    async def update_record(
        self,
        table: str,
        record_id: Any,
        fields: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """Set the given fields and return the updated record, or None if missing."""
        oid = to_object_id(record_id)
        if oid is None:
            return None
        if not fields:
            return await self.get_record(table, oid)

        try:
            result = await self.collection(table).find_one_and_update(
                {"_id": oid},
                {"$set": fields},
                return_document=ReturnDocument.AFTER
            )
        except PyMongoError as exc:
            raise RemoteQueryError(table, "update", exc) from exc

        return normalize(result) if result else None

    async def delete_record(self, table: str, record_id: Any) -> bool:
        """Delete a record by id; False when nothing was deleted."""
        oid = to_object_id(record_id)
        if oid is None:
            return False

        try:
            result = await self.collection(table).delete_one({"_id": oid})
        except PyMongoError as exc:
            raise RemoteQueryError(table, "delete", exc) from exc

        return result.deleted_count > 0

    async def _aggregate(self, table: str, pipeline: List[Dict[str, Any]], operation: str):
        results = []
        try:
            cursor = self.collection(table).aggregate(pipeline)
            async for record in cursor:
                results.append(normalize(record))
        except PyMongoError as exc:
            raise RemoteQueryError(table, operation, exc) from exc
        return results


# Global instance
table_store = TableStore()
