"""Snapshot codec and the key-value stores that hold saved games."""

from tilegame.persistence.snapshot import SNAPSHOT_VERSION, DecodedSnapshot, decode, dumps, encode
from tilegame.persistence.store import FileStore, KeyValueStore, MemoryStore

__all__ = [
    "DecodedSnapshot",
    "FileStore",
    "KeyValueStore",
    "MemoryStore",
    "SNAPSHOT_VERSION",
    "decode",
    "dumps",
    "encode",
]
