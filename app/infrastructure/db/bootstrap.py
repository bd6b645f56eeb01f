"""
Bootstrap do Mongo: define e aplica validadores (JSON Schema) e índices.
Roda no início da app para garantir coleções mínimas e consistência.
Não derruba a app se algo falhar; deixa warnings nos casos não críticos.
"""
from __future__ import annotations

from typing import Any, Dict, List
import logging
from pymongo.errors import PyMongoError
from app.infrastructure.db.mongo import get_db

_log = logging.getLogger("rotina.mongo.bootstrap")


def _collmod_or_create(name: str, validator: Dict[str, Any] | None) -> None:
    db = get_db()
    try:
        if name not in db.list_collection_names():
            if validator:
                db.create_collection(name, validator={"$jsonSchema": validator})
            else:
                db.create_collection(name)
        elif validator:
            db.command({
                "collMod": name,
                "validator": {"$jsonSchema": validator},
                "validationLevel": "moderate",
            })
    except PyMongoError as e:
        # Sem privilégio para collMod: segue sem validator estrito
        _log.warning("Não foi possível aplicar validator em '%s': %s", name, e)


def _ensure_indexes(name: str, indexes: List[Dict[str, Any]]) -> None:
    coll = get_db()[name]
    for ix in indexes:
        ix = dict(ix)
        keys = ix.pop("keys")
        try:
            coll.create_index(keys, **ix)
        except PyMongoError as e:
            _log.warning("Não foi possível criar índice em '%s' (%s): %s", name, keys, e)


def ensure_collections() -> None:
    """
    Garante coleções, validadores e índices mínimos.
    """
    # Routine
    routine_validator = {
        "bsonType": "object",
        "required": ["user_id", "name", "created_at", "updated_at"],
        "properties": {
            "user_id": {"bsonType": "string", "minLength": 1},
            "name": {"bsonType": "string", "minLength": 1},
            "description": {"bsonType": ["string", "null"]},
            "created_at": {"bsonType": "string", "minLength": 10},
            "updated_at": {"bsonType": "string", "minLength": 10},
        },
        "additionalProperties": True,
    }
    _collmod_or_create("routine", routine_validator)
    _ensure_indexes(
        "routine",
        [
            {"keys": [("user_id", 1), ("created_at", 1)], "name": "ix_routine_user_created"},
        ],
    )

    # Note (anotações do dia e resumos do dia)
    note_validator = {
        "bsonType": "object",
        "required": ["user_id", "activity", "status", "priority", "created_at", "updated_at"],
        "properties": {
            "user_id": {"bsonType": "string", "minLength": 1},
            "routine_id": {"bsonType": ["string", "null"]},
            "activity": {"bsonType": "string", "minLength": 1},
            "description": {"bsonType": ["string", "null"]},
            "status": {"bsonType": "string"},
            "priority": {"bsonType": "string"},
            "activity_type": {"bsonType": ["string", "null"]},
            "date": {"bsonType": ["string", "null"]},
            "start_time": {"bsonType": ["string", "null"]},
            "end_time": {"bsonType": ["string", "null"]},
            "collaborators": {"bsonType": "array", "items": {"bsonType": "string"}},
            "comments": {"bsonType": "array", "items": {"bsonType": "object"}},
            "summary_day": {"bsonType": ["string", "null"]},
            "summary_date": {"bsonType": ["string", "null"]},
            "created_at": {"bsonType": "string", "minLength": 10},
            "updated_at": {"bsonType": "string", "minLength": 10},
        },
        "additionalProperties": True,
    }
    _collmod_or_create("note", note_validator)
    _ensure_indexes(
        "note",
        [
            {"keys": [("user_id", 1), ("date", 1), ("start_time", 1)], "name": "ix_note_user_date"},
            # no máximo um resumo por usuário e data; notas comuns ficam fora do índice
            {
                "keys": [("user_id", 1), ("summary_date", 1)],
                "name": "uniq_note_user_summary_date",
                "unique": True,
                "partialFilterExpression": {"summary_date": {"$type": "string"}},
            },
        ],
    )

    # Notification
    notification_validator = {
        "bsonType": "object",
        "required": ["user_id", "title", "entity", "type_of_action", "is_new", "created_at"],
        "properties": {
            "user_id": {"bsonType": "string", "minLength": 1},
            "title": {"bsonType": "string", "minLength": 1},
            "entity": {"bsonType": "string"},
            "id_entity": {"bsonType": ["string", "null"]},
            "path": {"bsonType": ["string", "null"]},
            "type_of_action": {"bsonType": "string"},
            "payload": {"bsonType": ["object", "null"]},
            "is_new": {"bsonType": "bool"},
            "created_at": {"bsonType": "string", "minLength": 10},
            "read_at": {"bsonType": ["string", "null"]},
        },
        "additionalProperties": True,
    }
    _collmod_or_create("notification", notification_validator)
    _ensure_indexes(
        "notification",
        [
            {"keys": [("user_id", 1), ("is_new", 1)], "name": "ix_notification_user_new"},
            {"keys": [("user_id", 1), ("created_at", -1)], "name": "ix_notification_user_created"},
        ],
    )
