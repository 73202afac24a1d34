#!/usr/bin/env python3
"""
Print the settings and files of a storage scope.

Uso:
  python scripts/dump_storage.py [--user alice] [--folder cache] [--root /path/to/root]
"""
from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

# Garante que o pacote appstorage seja importável quando rodado diretamente
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from appstorage.core.log_setup import configure_logging
from appstorage.core.serializers import default_serializer
from appstorage.domain.values import CompositeValue
from appstorage.repositories.app_data import AppData
from appstorage.services.storage_helper import ApplicationDataStorageHelper, for_current_scope, for_user_scope


async def _resolve(args: argparse.Namespace) -> ApplicationDataStorageHelper:
    if args.root:
        return ApplicationDataStorageHelper(AppData(Path(args.root)), default_serializer())
    if args.user:
        return await for_user_scope(args.user)
    return for_current_scope()


async def dump(args: argparse.Namespace) -> None:
    helper = await _resolve(args)
    try:
        print(f"Root: {helper.app_data.root}")
        print("Settings:")
        for key in helper.keys():
            stored = helper.settings.get(key)
            if isinstance(stored, CompositeValue):
                print(f"  {key} (composite, {len(stored)} value(s))")
                for sub_key in sorted(stored):
                    print(f"    {sub_key} = {stored.get(sub_key)}")
            elif stored is not None:
                print(f"  {key} = {stored.value}")
        print(f"Folder: {args.folder or '.'}")
        for entry in await helper.read_folder(args.folder):
            print(f"  [{entry.kind.value}] {entry.name}")
    finally:
        helper.close()


def main() -> None:
    ap = argparse.ArgumentParser(description="Show settings and files of a storage scope")
    ap.add_argument("--user", help="User identifier (default: current scope)")
    ap.add_argument("--root", help="Explicit scope root directory")
    ap.add_argument("--folder", default="", help="Folder to list, relative to the local folder")
    ap.add_argument("--log-level", help="Logging level (default: APPSTORAGE_LOG_LEVEL)")
    args = ap.parse_args()

    configure_logging(args.log_level)
    asyncio.run(dump(args))


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - uso CLI
        sys.stderr.write(f"Erro: {exc}\n")
        raise SystemExit(1)
