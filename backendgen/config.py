"""Generation settings for the emitted Go project."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

OUTPUT_DIR = Path("generated")

BADGER_MODULE = "github.com/dgraph-io/badger/v4"


@dataclass(frozen=True)
class Settings:
    module_name: str = "generated-server"
    go_version: str = "1.22"
    badger_version: str = "v4.2.0"
    listen_addr: str = ":8080"
    db_path: str = "./data"
