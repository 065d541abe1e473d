import asyncio
import json
import logging
import os
import uuid
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient
from pydantic import BaseModel, ValidationError

from formbuilder.config import Settings
from formbuilder.errors import PersistenceFailure
from formbuilder.schemas import CustomFieldTemplate, Form, FormSubmission

logger = logging.getLogger(__name__)


class CollectionKind(str, Enum):
    FORMS = "forms"
    CUSTOM_FIELDS = "custom_fields"
    SUBMISSIONS = "submissions"

    @property
    def storage_key(self) -> str:
        return f"form_builder_{self.value}"

    @property
    def model(self):
        return _KIND_MODELS[self]

    @property
    def label(self) -> str:
        return _KIND_LABELS[self]


_KIND_MODELS = {
    CollectionKind.FORMS: Form,
    CollectionKind.CUSTOM_FIELDS: CustomFieldTemplate,
    CollectionKind.SUBMISSIONS: FormSubmission,
}

_KIND_LABELS = {
    CollectionKind.FORMS: "Form",
    CollectionKind.CUSTOM_FIELDS: "Custom field",
    CollectionKind.SUBMISSIONS: "Submission",
}


def new_id() -> str:
    return uuid.uuid4().hex


class KeyValueStore:
    """Storage handle the gateway writes whole collections through."""

    async def open(self) -> None:
        pass

    async def close(self) -> None:
        pass

    async def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    async def set(self, key: str, value: Any) -> None:
        raise NotImplementedError


class MemoryKeyValueStore(KeyValueStore):
    def __init__(self):
        self._data: Dict[str, str] = {}

    async def get(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    async def set(self, key: str, value: Any) -> None:
        # stored serialized so callers never share nested lists with the store
        self._data[key] = json.dumps(value)


class JsonFileKeyValueStore(KeyValueStore):
    """Local persistent store, one JSON file per key."""

    def __init__(self, directory: str):
        self.directory = Path(directory)

    async def open(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def _read(self, key: str) -> Optional[Any]:
        path = self._path(key)
        if not path.exists():
            return None
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _write(self, key: str, value: Any) -> None:
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(value, f, ensure_ascii=False)
        os.replace(tmp_path, path)

    async def get(self, key: str) -> Optional[Any]:
        return await asyncio.to_thread(self._read, key)

    async def set(self, key: str, value: Any) -> None:
        await asyncio.to_thread(self._write, key, value)


class MongoKeyValueStore(KeyValueStore):
    """One document per key: {"_id": key, "value": [...]}."""

    def __init__(self, uri: str, db_name: str, collection: str = "collections"):
        self._uri = uri
        self._db_name = db_name
        self._collection_name = collection
        self._client: Optional[AsyncIOMotorClient] = None
        self._collection = None

    async def open(self) -> None:
        self._client = AsyncIOMotorClient(self._uri)
        self._collection = self._client[self._db_name][self._collection_name]

    async def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
            self._collection = None

    async def get(self, key: str) -> Optional[Any]:
        doc = await self._collection.find_one({"_id": key})
        if not doc:
            return None
        return doc.get("value")

    async def set(self, key: str, value: Any) -> None:
        await self._collection.replace_one({"_id": key}, {"_id": key, "value": value}, upsert=True)


def build_store(settings: Settings) -> KeyValueStore:
    if settings.STORAGE_BACKEND == "mongo":
        return MongoKeyValueStore(settings.MONGO_URI, settings.DB_NAME)
    if settings.STORAGE_BACKEND == "memory":
        return MemoryKeyValueStore()
    return JsonFileKeyValueStore(settings.DATA_DIR)


class PersistenceGateway:
    """Loads and saves the full entity set of one collection kind at a time.

    Every mutation is a read-modify-write of the whole kind, so two writers
    racing on the same kind lose updates (last write wins). The builder
    assumes a single active editor.
    """

    def __init__(self, store: KeyValueStore, latency_ms: int = 0):
        self.store = store
        self.latency_ms = latency_ms

    async def _delay(self) -> None:
        if self.latency_ms > 0:
            await asyncio.sleep(self.latency_ms / 1000)

    async def load(self, kind: CollectionKind) -> List[BaseModel]:
        await self._delay()
        try:
            raw = await self.store.get(kind.storage_key)
            return [kind.model.model_validate(item) for item in raw or []]
        except ValidationError as e:
            logger.warning("Stored %s are not readable: %s", kind.value, e)
            raise PersistenceFailure(f"Stored {kind.value} are corrupted") from e
        except Exception as e:
            logger.warning("Loading %s failed: %s", kind.value, e)
            raise PersistenceFailure(f"Could not load {kind.value}: {e}") from e

    async def save_all(self, kind: CollectionKind, entities: List[BaseModel]) -> None:
        await self._delay()
        payload = [entity.model_dump(mode="json", exclude_none=True) for entity in entities]
        try:
            await self.store.set(kind.storage_key, payload)
        except Exception as e:
            logger.warning("Saving %s failed: %s", kind.value, e)
            raise PersistenceFailure(f"Could not save {kind.value}: {e}") from e


def get_gateway(request: Request) -> PersistenceGateway:
    return request.app.state.gateway
