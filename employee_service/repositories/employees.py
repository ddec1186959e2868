"""
employees 컬렉션 접근 계층.

서비스는 EmployeeRepository 프로토콜에만 의존하고, 실제 구현은
MongoEmployeeRepository(Motor)다. pymongo 예외는 전부 InfrastructureFault로 감싼다.
"""
import logging
from datetime import datetime, timedelta
from typing import Any, Protocol

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from employee_service.core.errors import InfrastructureFault

logger = logging.getLogger(__name__)

NEWEST_FIRST = [("createdAt", DESCENDING), ("_id", DESCENDING)]

# updatedAt은 수정마다 최소 이만큼은 증가해야 한다
MIN_UPDATE_STEP = timedelta(milliseconds=1)


class EmployeeRepository(Protocol):
    async def list_newest_first(self) -> list[dict[str, Any]]: ...

    async def get(self, employee_id: ObjectId) -> dict[str, Any] | None: ...

    async def insert(self, document: dict[str, Any]) -> dict[str, Any]: ...

    async def update(
        self, employee_id: ObjectId, changes: dict[str, Any], now: datetime
    ) -> dict[str, Any] | None: ...

    async def delete(self, employee_id: ObjectId) -> dict[str, Any] | None: ...


class MongoEmployeeRepository:
    def __init__(self, collection: AsyncIOMotorCollection) -> None:
        self._collection = collection

    async def ensure_indexes(self) -> None:
        try:
            await self._collection.create_index(NEWEST_FIRST, name="createdAt_desc")
        except PyMongoError as exc:
            raise InfrastructureFault(str(exc)) from exc

    async def list_newest_first(self) -> list[dict[str, Any]]:
        try:
            cursor = self._collection.find({}).sort(NEWEST_FIRST)
            return await cursor.to_list(length=None)
        except PyMongoError as exc:
            raise InfrastructureFault(str(exc)) from exc

    async def get(self, employee_id: ObjectId) -> dict[str, Any] | None:
        try:
            return await self._collection.find_one({"_id": employee_id})
        except PyMongoError as exc:
            raise InfrastructureFault(str(exc)) from exc

    async def insert(self, document: dict[str, Any]) -> dict[str, Any]:
        doc = dict(document)
        try:
            result = await self._collection.insert_one(doc)
        except PyMongoError as exc:
            raise InfrastructureFault(str(exc)) from exc
        doc["_id"] = result.inserted_id
        return doc

    async def update(
        self, employee_id: ObjectId, changes: dict[str, Any], now: datetime
    ) -> dict[str, Any] | None:
        """
        보낸 필드만 $set 하고 updatedAt을 max(now, 이전 값 + 1ms)로 갱신.
        aggregation pipeline update라서 읽기-쓰기가 한 번의 원자적 호출로 끝난다.
        """
        pipeline = [
            {
                "$set": {
                    # $literal: 값이 "$..."로 시작해도 필드 참조로 해석되지 않게
                    **{key: {"$literal": value} for key, value in changes.items()},
                    "updatedAt": {
                        "$max": [
                            now,
                            {
                                "$add": [
                                    "$updatedAt",
                                    int(MIN_UPDATE_STEP.total_seconds() * 1000),
                                ]
                            },
                        ]
                    },
                }
            }
        ]
        try:
            return await self._collection.find_one_and_update(
                {"_id": employee_id},
                pipeline,
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as exc:
            raise InfrastructureFault(str(exc)) from exc

    async def delete(self, employee_id: ObjectId) -> dict[str, Any] | None:
        try:
            return await self._collection.find_one_and_delete({"_id": employee_id})
        except PyMongoError as exc:
            raise InfrastructureFault(str(exc)) from exc
